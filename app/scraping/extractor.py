"""
Homepage fetcher and keyword digest extractor.
"""

from __future__ import annotations

import asyncio
import logging

import aiohttp

from app.domain.categorization import KeywordDigest
from app.scraping.errors import FetchError, ParseError
from app.scraping.logging_utils import log_event
from app.scraping.parsing.html_parsers import KeywordParsingLayer, SelectorError

logger = logging.getLogger(__name__)

DEFAULT_URL_TEMPLATE = "http://{domain}/"


class TextExtractor:
    """
    Fetches a domain's homepage and reduces it to a keyword digest.
    """

    def __init__(
        self,
        *,
        session: aiohttp.ClientSession,
        user_agent: str,
        timeout_seconds: float = 30.0,
        parser: KeywordParsingLayer | None = None,
        url_template: str = DEFAULT_URL_TEMPLATE,
    ) -> None:
        self._session = session
        self._timeout = aiohttp.ClientTimeout(total=timeout_seconds)
        self._timeout_seconds = timeout_seconds
        self._parser = parser or KeywordParsingLayer()
        self._url_template = url_template
        self.request_headers = {"User-Agent": user_agent}

    async def extract(self, domain: str) -> KeywordDigest:
        """
        Fetch `domain` and return its digest, possibly empty.

        Raises FetchError on transport failures, timeouts and non-2xx
        responses, and ParseError when a selector cannot be applied.
        """

        body = await self.fetch(domain)
        try:
            digest = self._parser.build_digest(body)
        except SelectorError as exc:
            raise ParseError(domain, str(exc)) from exc

        log_event(
            logger,
            logging.DEBUG,
            "page_extracted",
            domain=domain,
            tokens=len(digest),
            digest=digest.text,
        )
        return digest

    async def fetch(self, domain: str) -> str:
        url = self._url_template.format(domain=domain)
        try:
            async with self._session.get(
                url,
                headers=self.request_headers,
                timeout=self._timeout,
                allow_redirects=True,
            ) as response:
                if not 200 <= response.status < 300:
                    raise FetchError(
                        domain,
                        f"HTTP status {response.status} from {url}",
                        status=response.status,
                    )
                return await response.text(errors="replace")
        except asyncio.TimeoutError as exc:
            raise FetchError(domain, f"timed out after {self._timeout_seconds:g}s") from exc
        except aiohttp.ClientError as exc:
            raise FetchError(domain, f"{type(exc).__name__}: {exc}") from exc
        except LookupError as exc:
            # Unknown charset announced by the server.
            raise FetchError(domain, f"undecodable body: {exc}") from exc
