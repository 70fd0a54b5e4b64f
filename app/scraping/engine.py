"""
Domain categorization engine.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence

from app import failure_codes
from app.domain.categorization import DomainOutcome, DomainState
from app.scraping.errors import ExtractionError, ExtractionTooShort
from app.scraping.extractor import TextExtractor
from app.scraping.logging_utils import log_event
from app.storage.base import ResultSink
from llm_classification.adapter import CompletionError
from llm_classification.classifier import CategoryClassifier
from llm_classification.schema import Classification
from llm_classification.validator import CategoryValidationError

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 32


class DomainCategorizationEngine:
    """
    Runs per-domain workflows in fixed-size batches and routes outcomes.

    A batch is fully joined before the next one starts, so at most
    `batch_size` workflows are ever in a non-terminal state.
    """

    def __init__(
        self,
        *,
        extractor: TextExtractor,
        classifier: CategoryClassifier,
        sink: ResultSink,
        batch_size: int = DEFAULT_BATCH_SIZE,
        min_digest_length: int = 3,
    ) -> None:
        self._extractor = extractor
        self._classifier = classifier
        self._sink = sink
        self._batch_size = max(1, batch_size)
        self._min_digest_length = min_digest_length
        self._states: dict[str, DomainState] = {}
        self.peak_in_flight = 0
        self.batches_run = 0

    @property
    def in_flight(self) -> int:
        return sum(1 for state in self._states.values() if not state.is_terminal)

    async def run(self, domains: Sequence[str]) -> list[DomainOutcome]:
        outcomes: list[DomainOutcome] = []
        total_batches = (len(domains) + self._batch_size - 1) // self._batch_size

        for start in range(0, len(domains), self._batch_size):
            batch = domains[start : start + self._batch_size]
            batch_number = start // self._batch_size + 1
            log_event(
                logger,
                logging.INFO,
                "batch_started",
                batch=batch_number,
                total_batches=total_batches,
                domains=len(batch),
            )

            results = await asyncio.gather(*(self.process_domain(domain) for domain in batch))
            outcomes.extend(results)
            self.batches_run += 1

            succeeded = sum(1 for outcome in results if outcome.succeeded)
            log_event(
                logger,
                logging.INFO,
                "batch_completed",
                batch=batch_number,
                total_batches=total_batches,
                succeeded=succeeded,
                failed=len(results) - succeeded,
            )
        return outcomes

    async def process_domain(self, domain: str) -> DomainOutcome:
        """
        Drive one domain to a terminal state and record the result.

        Never raises for per-domain failures; they become failure records.
        """

        self._transition(domain, DomainState.PENDING)
        try:
            try:
                outcome, classification = await self._categorize(domain)
            except Exception as exc:
                crashed_in = self._states.get(domain, DomainState.PENDING)
                log_event(
                    logger,
                    logging.ERROR,
                    "domain_workflow_crashed",
                    domain=domain,
                    stage=crashed_in.value,
                    error=f"{type(exc).__name__}: {exc}",
                )
                outcome = DomainOutcome(
                    domain=domain,
                    state=_failed_state(crashed_in),
                    failure_code=failure_codes.UNEXPECTED_ERROR,
                    error=str(exc),
                )
                classification = None

            self._transition(domain, outcome.state)
            if classification is not None:
                await self._sink.record_success(classification)
            else:
                await self._sink.record_failure(domain)
            return outcome
        finally:
            self._states.pop(domain, None)

    async def _categorize(self, domain: str) -> tuple[DomainOutcome, Classification | None]:
        self._transition(domain, DomainState.FETCHING)
        try:
            digest = await self._extractor.extract(domain)
            if len(digest.text) < self._min_digest_length:
                raise ExtractionTooShort(domain, digest.text, self._min_digest_length)
        except ExtractionError as exc:
            log_event(
                logger,
                logging.WARNING,
                exc.code,
                domain=domain,
                error=str(exc),
            )
            return (
                DomainOutcome(
                    domain=domain,
                    state=DomainState.FETCH_FAILED,
                    failure_code=exc.code,
                    error=str(exc),
                ),
                None,
            )

        self._transition(domain, DomainState.EXTRACTED)
        self._transition(domain, DomainState.CLASSIFYING)
        try:
            classification = await self._classifier.classify(domain, digest)
        except (CompletionError, CategoryValidationError) as exc:
            fields = {"domain": domain, "error": str(exc)}
            if isinstance(exc, CategoryValidationError):
                fields["response"] = exc.raw_response
            log_event(logger, logging.WARNING, exc.code, **fields)
            return (
                DomainOutcome(
                    domain=domain,
                    state=DomainState.CLASSIFY_FAILED,
                    failure_code=exc.code,
                    error=str(exc),
                ),
                None,
            )

        return (
            DomainOutcome(
                domain=domain,
                state=DomainState.CLASSIFIED,
                category=classification.category,
            ),
            classification,
        )

    def _transition(self, domain: str, state: DomainState) -> None:
        self._states[domain] = state
        self.peak_in_flight = max(self.peak_in_flight, self.in_flight)


def _failed_state(state: DomainState) -> DomainState:
    if state in (DomainState.PENDING, DomainState.FETCHING):
        return DomainState.FETCH_FAILED
    return DomainState.CLASSIFY_FAILED
