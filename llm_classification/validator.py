"""Validation layer for raw classification answers.

Turns a free-text completion into an accepted ``Classification`` or a
terminal rejection. Checks run in order and the first failure wins.
"""

from app import failure_codes
from llm_classification.categories import word_in_list
from llm_classification.schema import Classification


class CategoryValidationError(Exception):
    """Raised when a completion answer is rejected.

    Attributes:
        domain: The domain being classified.
        stage: Which validation step failed.
        raw_response: The original answer that failed validation.
    """

    stage = "validation"
    code = failure_codes.UNEXPECTED_ERROR

    def __init__(self, domain: str, raw_response: str, message: str) -> None:
        self.domain = domain
        self.raw_response = raw_response
        super().__init__(
            f"Classification for {domain} rejected at stage '{self.stage}': {message}"
        )


class EmptyResponse(CategoryValidationError):
    """The completion service returned nothing."""

    stage = "empty"
    code = failure_codes.EMPTY_RESPONSE


class MultiWordResponse(CategoryValidationError):
    """The answer holds more than one whitespace-separated token."""

    stage = "multi_word"
    code = failure_codes.MULTI_WORD_RESPONSE


class NotInAllowList(CategoryValidationError):
    """The answer is a single token that is not an allow-list label."""

    stage = "allow_list"
    code = failure_codes.NOT_IN_ALLOW_LIST


def validate_category_response(domain: str, raw_response: str) -> Classification:
    """Validate a raw completion answer for ``domain``.

    Steps:
        1. Empty (or whitespace-only) answer -> ``EmptyResponse``.
        2. More than one whitespace-separated token -> ``MultiWordResponse``.
        3. Trimmed answer not exactly an allow-list label -> ``NotInAllowList``.
        4. Otherwise the trimmed answer becomes the category.

    A whitespace-only answer counts as empty here rather than as an unknown
    label; either way the domain ends on the failure path.

    Args:
        domain: Normalized domain name.
        raw_response: The raw answer returned by the completion adapter.

    Returns:
        A validated ``Classification``.

    Raises:
        CategoryValidationError: One of the three subclasses above.
    """
    tokens = raw_response.split()
    if not tokens:
        raise EmptyResponse(domain, raw_response, "no answer")
    if len(tokens) > 1:
        raise MultiWordResponse(
            domain, raw_response, f"answer has {len(tokens)} words"
        )

    answer = raw_response.strip()
    if not word_in_list(answer):
        raise NotInAllowList(
            domain, raw_response, f"{answer!r} is not an allowed category"
        )
    return Classification(domain=domain, category=answer)
