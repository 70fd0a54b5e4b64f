"""
Extraction error taxonomy.
"""

from __future__ import annotations

from app import failure_codes


class ExtractionError(Exception):
    """
    Base class for failures while turning a homepage into a keyword digest.
    """

    code = failure_codes.UNEXPECTED_ERROR

    def __init__(self, domain: str, message: str) -> None:
        self.domain = domain
        super().__init__(f"{domain}: {message}")


class FetchError(ExtractionError):
    """
    Network failure, timeout, or non-success HTTP status.
    """

    code = failure_codes.FETCH_FAILED

    def __init__(self, domain: str, message: str, status: int | None = None) -> None:
        self.status = status
        super().__init__(domain, message)


class ParseError(ExtractionError):
    """
    A structural selector could not be applied to the document.
    """

    code = failure_codes.PARSE_FAILED


class ExtractionTooShort(ExtractionError):
    """
    The keyword digest is shorter than the configured minimum length.
    """

    code = failure_codes.DIGEST_TOO_SHORT

    def __init__(self, domain: str, digest: str, min_length: int) -> None:
        self.digest = digest
        self.min_length = min_length
        super().__init__(
            domain,
            f"keyword digest has {len(digest)} characters, need at least {min_length}",
        )
