"""
app/services/categorization_service.py

Service orchestration for one domain categorization run.

Startup order:

    1. Load the deduplicated domain list (fatal on failure).
    2. Shuffle it so partial runs sample different domains first.
    3. Skip domains the success log already covers (resume check).
    4. Run the remaining domains through the engine in fixed-size batches.
"""

from __future__ import annotations

import logging
import random
from collections import Counter

import aiohttp

from app.config import (
    CategorizationSettings,
    CompletionSettings,
    get_categorization_settings,
    get_completion_settings,
)
from app.domain.categorization import PipelineRunSummary
from app.scraping.engine import DomainCategorizationEngine
from app.scraping.extractor import DEFAULT_URL_TEMPLATE, TextExtractor
from app.scraping.logging_utils import log_event
from app.services.domain_loader import load_domains
from app.services.resume import ResumeIndex
from app.storage.file_sink import FileResultSink
from llm_classification.adapter import BaseCompletionAdapter, build_completion_adapter
from llm_classification.classifier import CategoryClassifier

logger = logging.getLogger(__name__)


class CategorizationService:
    """
    Wires loader, resume check, extractor, classifier and sink for one run.
    """

    def __init__(
        self,
        *,
        settings: CategorizationSettings | None = None,
        completion_settings: CompletionSettings | None = None,
        adapter: BaseCompletionAdapter | None = None,
        rng: random.Random | None = None,
        url_template: str = DEFAULT_URL_TEMPLATE,
    ) -> None:
        self._settings = settings or get_categorization_settings()
        self._completion_settings = completion_settings
        self._adapter = adapter
        self._rng = rng or random.Random()
        self._url_template = url_template

    @property
    def settings(self) -> CategorizationSettings:
        return self._settings

    def prepare_domains(self) -> tuple[list[str], int, int]:
        """
        Return (pending domains, loaded count, skipped count).

        Raises DomainListError if the input list cannot be read.
        """

        domains = load_domains(self._settings.input_path)
        if self._settings.shuffle:
            self._rng.shuffle(domains)

        resume = ResumeIndex.from_log(
            self._settings.success_log_path,
            mode=self._settings.resume_mode,
        )
        pending = [domain for domain in domains if not resume.is_done(domain)]
        skipped = len(domains) - len(pending)
        if skipped:
            log_event(
                logger,
                logging.INFO,
                "resume_skipped",
                domains=skipped,
                mode=resume.mode,
            )

        if self._settings.limit is not None:
            pending = pending[: self._settings.limit]
        return pending, len(domains), skipped

    async def run(self) -> PipelineRunSummary:
        pending, loaded, skipped = self.prepare_domains()

        async with aiohttp.ClientSession() as session:
            adapter = self._adapter
            owns_adapter = adapter is None
            if adapter is None:
                adapter = build_completion_adapter(
                    self._completion_settings or get_completion_settings(),
                    session=session,
                )
            try:
                async with FileResultSink(
                    success_log_path=self._settings.success_log_path,
                    failure_log_path=self._settings.failure_log_path,
                    queue_size=self._settings.sink_queue_size,
                ) as sink:
                    engine = DomainCategorizationEngine(
                        extractor=TextExtractor(
                            session=session,
                            user_agent=self._settings.user_agent,
                            timeout_seconds=self._settings.fetch_timeout_seconds,
                            url_template=self._url_template,
                        ),
                        classifier=CategoryClassifier(adapter),
                        sink=sink,
                        batch_size=self._settings.batch_size,
                        min_digest_length=self._settings.min_digest_length,
                    )
                    outcomes = await engine.run(pending)
            finally:
                if owns_adapter:
                    await adapter.aclose()

        failure_counts = Counter(
            outcome.failure_code for outcome in outcomes if not outcome.succeeded
        )
        succeeded = sum(1 for outcome in outcomes if outcome.succeeded)
        summary = PipelineRunSummary(
            domains_loaded=loaded,
            domains_skipped=skipped,
            domains_attempted=len(outcomes),
            succeeded=succeeded,
            failed=len(outcomes) - succeeded,
            batches=engine.batches_run,
            peak_in_flight=engine.peak_in_flight,
            failure_codes=dict(sorted(failure_counts.items())),
        )
        log_event(
            logger,
            logging.INFO,
            "pipeline_completed",
            loaded=summary.domains_loaded,
            skipped=summary.domains_skipped,
            attempted=summary.domains_attempted,
            succeeded=summary.succeeded,
            failed=summary.failed,
            batches=summary.batches,
        )
        return summary
