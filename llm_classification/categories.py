"""Closed allow-list of category labels."""

from typing import Tuple

KEYWORDS: Tuple[str, ...] = (
    "Internet Service Provider",
    "Telecommunications",
    "Hosting",
    "Technology",
    "Education",
    "Government",
    "Banking/Finance",
    "Healthcare",
    "Cloud",
    "Energy",
    "Consulting",
    "Marketing",
    "Communications",
    "Business",
    "Media/Entertainment",
    "Travel",
    "News",
    "Gaming",
    "Logistics",
    "Automotive",
    "Retail",
    "Industry",
    "Sports",
    "Agriculture",
    "Fashion",
    "Infrastructure",
    "Community",
    "Pharmaceuticals",
    "Charity",
    "Adult",
    "Streaming",
    "Other",
)

FALLBACK_CATEGORY = "Other"

_KEYWORD_SET = frozenset(KEYWORDS)


def category_prompt() -> str:
    """Render the allow-list as the sentence embedded in every prompt."""
    category_list = ", ".join(KEYWORDS)
    return f"Categories MUST be one of the following: {category_list}"


def word_in_list(word: str) -> bool:
    """Case-sensitive exact membership check against the allow-list."""
    return word in _KEYWORD_SET
