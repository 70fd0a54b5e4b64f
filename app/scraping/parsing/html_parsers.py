"""
BeautifulSoup-based keyword extraction for homepages.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from itertools import groupby

from bs4 import BeautifulSoup
from soupsieve import SelectorSyntaxError

from app.domain.categorization import KeywordDigest

# Title, metadata, list/nav text, primary heading, body paragraphs.
DEFAULT_SELECTORS: tuple[str, ...] = ("title", "meta", "ul,li", "h1", "p")

MIN_TOKEN_LENGTH = 4
MAX_DIGEST_TOKENS = 100

# HTML5 tree construction: implied end tags close <p> and <li>.
HTML_PARSER = "html5lib"


class SelectorError(ValueError):
    """
    Raised when a CSS selector cannot be compiled.
    """

    def __init__(self, selector: str, reason: str) -> None:
        self.selector = selector
        super().__init__(f"invalid selector {selector!r}: {reason}")


class KeywordParsingLayer:
    """
    Deterministic keyword digest builder for HTML documents.
    """

    def __init__(
        self,
        *,
        selectors: Sequence[str] = DEFAULT_SELECTORS,
        max_tokens: int = MAX_DIGEST_TOKENS,
    ) -> None:
        self._selectors = tuple(selectors)
        self._max_tokens = max_tokens

    @property
    def selectors(self) -> tuple[str, ...]:
        return self._selectors

    def build_digest(self, html: str) -> KeywordDigest:
        """
        Parse `html` leniently and return its ranked keyword digest.
        """

        soup = BeautifulSoup(html, HTML_PARSER)
        tokens: list[str] = []
        for selector in self._selectors:
            tokens.extend(self.find_content(soup=soup, selector=selector))
        return KeywordDigest(tokens=rank_keywords(tokens, limit=self._max_tokens))

    @classmethod
    def find_content(cls, *, soup: BeautifulSoup, selector: str) -> list[str]:
        """
        Return the kept tokens from every element matching `selector`.

        Each element contributes its concatenated text nodes; nested matches
        (an `li` inside a matched `ul`) are counted once per matching element.
        """

        try:
            elements = soup.select(selector)
        except SelectorSyntaxError as exc:
            raise SelectorError(selector, str(exc)) from exc

        content: list[str] = []
        for element in elements:
            content.extend(tokenize(element.get_text()))
        return content


def tokenize(text: str) -> list[str]:
    """
    Split on whitespace, keep tokens longer than three characters, lowercase.
    """

    return [
        token.strip().lower()
        for token in text.split()
        if len(token) >= MIN_TOKEN_LENGTH
    ]


def rank_keywords(tokens: Iterable[str], *, limit: int = MAX_DIGEST_TOKENS) -> tuple[str, ...]:
    """
    Rank tokens by descending frequency, ties in alphabetical order.

    Sorting alphabetically first and then stably by count is what makes the
    tie-break alphabetical.
    """

    counted = [
        (sum(1 for _ in group), token)
        for token, group in groupby(sorted(tokens))
    ]
    counted.sort(key=lambda pair: pair[0], reverse=True)
    return tuple(token for _, token in counted[:limit])
