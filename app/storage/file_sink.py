"""
File-backed result sink: one success log and one failure log.
"""

from __future__ import annotations

import logging
from pathlib import Path
from types import TracebackType

from app.scraping.logging_utils import log_event
from app.storage.base import ResultSink
from app.storage.log_writer import AppendOnlyLogWriter
from llm_classification.schema import Classification

logger = logging.getLogger(__name__)


class FileResultSink(ResultSink):
    """
    Persists `domain,category` rows and bare failed domains.

    Both logs are append-only, created on first write, and never truncated.
    No deduplication happens here.
    """

    def __init__(
        self,
        *,
        success_log_path: str | Path,
        failure_log_path: str | Path,
        queue_size: int = 32,
    ) -> None:
        self._success = AppendOnlyLogWriter(
            path=success_log_path,
            name="success",
            queue_size=queue_size,
        )
        self._failure = AppendOnlyLogWriter(
            path=failure_log_path,
            name="failure",
            queue_size=queue_size,
        )

    @property
    def success_writer(self) -> AppendOnlyLogWriter:
        return self._success

    @property
    def failure_writer(self) -> AppendOnlyLogWriter:
        return self._failure

    async def __aenter__(self) -> "FileResultSink":
        self.start()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        traceback: TracebackType | None,
    ) -> None:
        await self.close()

    def start(self) -> None:
        self._success.start()
        self._failure.start()

    async def close(self) -> None:
        await self._success.close()
        await self._failure.close()

    async def record_success(self, classification: Classification) -> None:
        log_event(
            logger,
            logging.INFO,
            "domain_categorized",
            domain=classification.domain,
            category=classification.category,
        )
        await self._success.put(classification.to_log_line())

    async def record_failure(self, domain: str) -> None:
        log_event(logger, logging.INFO, "domain_failed", domain=domain)
        await self._failure.put(domain)
