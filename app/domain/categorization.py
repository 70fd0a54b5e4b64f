"""
app/domain/categorization.py

Domain models shared by extraction, classification and orchestration.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


def normalize_domain(raw: str) -> str:
    """
    Lowercase and trim a hostname. Returns an empty string for blank input.
    """

    return raw.strip().lower()


@dataclass(frozen=True)
class KeywordDigest:
    """
    Ranked, deduplicated keyword summary of one homepage.
    """

    tokens: tuple[str, ...] = ()

    @property
    def text(self) -> str:
        return " ".join(self.tokens)

    def __len__(self) -> int:
        return len(self.tokens)

    def __str__(self) -> str:
        return self.text


class DomainState(str, Enum):
    """
    Lifecycle of one domain workflow within a single run.
    """

    PENDING = "pending"
    FETCHING = "fetching"
    FETCH_FAILED = "fetch_failed"
    EXTRACTED = "extracted"
    CLASSIFYING = "classifying"
    CLASSIFY_FAILED = "classify_failed"
    CLASSIFIED = "classified"

    @property
    def is_terminal(self) -> bool:
        return self in _TERMINAL_STATES


_TERMINAL_STATES = frozenset(
    {
        DomainState.FETCH_FAILED,
        DomainState.CLASSIFY_FAILED,
        DomainState.CLASSIFIED,
    }
)


@dataclass(frozen=True)
class DomainOutcome:
    """
    Terminal result of one domain workflow.
    """

    domain: str
    state: DomainState
    category: str | None = None
    failure_code: str | None = None
    error: str | None = None

    @property
    def succeeded(self) -> bool:
        return self.state is DomainState.CLASSIFIED


@dataclass(frozen=True)
class PipelineRunSummary:
    """
    End-of-run summary for one categorization pass.
    """

    domains_loaded: int
    domains_skipped: int
    domains_attempted: int
    succeeded: int
    failed: int
    batches: int
    peak_in_flight: int
    failure_codes: dict[str, int] = field(default_factory=dict)
