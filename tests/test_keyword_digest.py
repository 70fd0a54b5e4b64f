"""
tests/test_keyword_digest.py

Keyword digest extraction from HTML: selector coverage, token filtering and
the frequency-then-alphabetical ranking.
"""

from __future__ import annotations

import pytest

from app.scraping.parsing.html_parsers import (
    KeywordParsingLayer,
    SelectorError,
    rank_keywords,
    tokenize,
)


@pytest.fixture()
def parser() -> KeywordParsingLayer:
    return KeywordParsingLayer()


class TestTokenize:
    def test_drops_tokens_of_three_characters_or_fewer(self) -> None:
        assert tokenize("a an the four fives") == ["four", "fives"]

    def test_lowercases_and_splits_on_any_whitespace(self) -> None:
        assert tokenize("Hello\tWORLD\n  Again") == ["hello", "world", "again"]

    def test_keeps_punctuation_attached(self) -> None:
        assert tokenize("Welcome, friends!") == ["welcome,", "friends!"]


class TestRankKeywords:
    def test_orders_by_count_descending(self) -> None:
        tokens = ["beta"] * 3 + ["alpha"] + ["gamma"] * 2
        assert rank_keywords(tokens) == ("beta", "gamma", "alpha")

    def test_ties_are_alphabetical(self) -> None:
        tokens = ["zulu", "mike", "alpha", "mike", "zulu", "alpha"]
        assert rank_keywords(tokens) == ("alpha", "mike", "zulu")

    def test_removes_duplicates(self) -> None:
        ranked = rank_keywords(["word"] * 10)
        assert ranked == ("word",)

    def test_caps_at_limit(self) -> None:
        tokens = [f"token{index:03d}" for index in range(250)]
        ranked = rank_keywords(tokens)
        assert len(ranked) == 100
        assert ranked[0] == "token000"
        assert ranked[-1] == "token099"

    def test_empty_input(self) -> None:
        assert rank_keywords([]) == ()

    def test_order_of_input_does_not_matter(self) -> None:
        tokens = ["news", "sports", "news", "weather", "sports", "news"]
        assert rank_keywords(tokens) == rank_keywords(list(reversed(tokens)))


class TestBuildDigest:
    def test_title_only_page(self, parser: KeywordParsingLayer) -> None:
        html = "<html><head><title>Example Domain</title></head><body></body></html>"
        digest = parser.build_digest(html)
        assert digest.tokens == ("domain", "example")
        assert digest.text == "domain example"

    def test_collects_from_every_selector(self, parser: KeywordParsingLayer) -> None:
        html = """
        <html>
          <head><title>Title words</title><meta name="x" content="ignored content"></head>
          <body>
            <h1>Heading</h1>
            <h2>Skipped subheading</h2>
            <p>Paragraph text</p>
            <div>Division ignored</div>
          </body>
        </html>
        """
        digest = parser.build_digest(html)
        assert set(digest.tokens) == {"title", "words", "heading", "paragraph", "text"}

    def test_list_items_count_for_list_and_item(self, parser: KeywordParsingLayer) -> None:
        html = "<ul><li>Hosting</li></ul><p>Cloud servers servers</p>"
        digest = parser.build_digest(html)
        # "hosting" matches both the ul and the li.
        assert digest.tokens == ("hosting", "servers", "cloud")

    def test_nested_text_is_concatenated_without_separator(self, parser: KeywordParsingLayer) -> None:
        digest = parser.build_digest("<p>Fast<b>Fibre</b> internet</p>")
        assert digest.tokens == ("fastfibre", "internet")

    def test_malformed_markup_does_not_raise(self, parser: KeywordParsingLayer) -> None:
        html = "<html><title>Broken page</title></div><p>unclosed <b>tags <li>everywhere"
        digest = parser.build_digest(html)
        assert "broken" in digest.tokens
        assert "everywhere" in digest.tokens

    def test_implied_paragraph_end_tags_keep_paragraphs_apart(self, parser: KeywordParsingLayer) -> None:
        digest = parser.build_digest("<p>Welcome here<p>Hosting plans<p>Contact sales")
        assert digest.text == "contact here hosting plans sales welcome"

    def test_implied_list_item_end_tags_keep_items_apart(self) -> None:
        parser = KeywordParsingLayer(selectors=("li",))
        digest = parser.build_digest("<ul><li>Alpha hosting<li>Beta cloud<li>Gamma servers</ul>")
        assert digest.text == "alpha beta cloud gamma hosting servers"

    def test_empty_document_yields_empty_digest(self, parser: KeywordParsingLayer) -> None:
        digest = parser.build_digest("")
        assert digest.tokens == ()
        assert digest.text == ""
        assert len(digest) == 0

    def test_digest_properties_hold_for_noisy_page(self, parser: KeywordParsingLayer) -> None:
        words = " ".join(f"Word{index} WORD{index}" for index in range(300))
        html = f"<title>Noise</title><p>{words} tiny a an</p>"
        digest = parser.build_digest(html)
        assert len(digest.tokens) == 100
        assert len(set(digest.tokens)) == len(digest.tokens)
        for token in digest.tokens:
            assert len(token) > 3
            assert token == token.lower()
            assert token == token.strip()

    def test_same_tokens_same_digest(self, parser: KeywordParsingLayer) -> None:
        first = parser.build_digest("<p>gamma beta alpha beta</p>")
        second = parser.build_digest("<p>beta alpha</p><h1>beta gamma</h1>")
        assert first == second

    def test_invalid_selector_raises_selector_error(self) -> None:
        parser = KeywordParsingLayer(selectors=("p[",))
        with pytest.raises(SelectorError):
            parser.build_digest("<p>text here</p>")
