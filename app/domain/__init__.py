"""
app/domain package marker.
"""

from app.domain.categorization import (
    DomainOutcome,
    DomainState,
    KeywordDigest,
    PipelineRunSummary,
    normalize_domain,
)

__all__ = [
    "DomainOutcome",
    "DomainState",
    "KeywordDigest",
    "PipelineRunSummary",
    "normalize_domain",
]
