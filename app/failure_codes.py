"""Shared failure code constants for per-domain error handling.

Codes are logged with each failed domain; they are never persisted to the
failure log.
"""

FETCH_FAILED = "fetch_failed"
PARSE_FAILED = "parse_failed"
DIGEST_TOO_SHORT = "digest_too_short"
COMPLETION_FAILED = "completion_failed"
EMPTY_RESPONSE = "empty_response"
MULTI_WORD_RESPONSE = "multi_word_response"
NOT_IN_ALLOW_LIST = "not_in_allow_list"
UNEXPECTED_ERROR = "unexpected_error"
