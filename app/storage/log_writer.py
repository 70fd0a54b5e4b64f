"""
Single-consumer append-only log writer.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from app.scraping.logging_utils import log_event
from app.storage.errors import SinkWriteError

logger = logging.getLogger(__name__)

_STOP = object()


class AppendOnlyLogWriter:
    """
    Owns one log file and appends queued lines to it in FIFO order.

    Producers await `put`, which only blocks while the bounded queue is full.
    A single consumer task performs every file write, so lines from
    concurrent producers never interleave.
    """

    def __init__(self, *, path: str | Path, name: str, queue_size: int = 32) -> None:
        self.path = Path(path)
        self.name = name
        self.lines_written = 0
        self.write_failures = 0
        self._queue: asyncio.Queue[object] = asyncio.Queue(maxsize=max(1, queue_size))
        self._consumer: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._consumer is not None and not self._consumer.done()

    def start(self) -> None:
        if self._consumer is not None:
            raise RuntimeError(f"Log writer '{self.name}' already started.")
        self._consumer = asyncio.create_task(self._consume(), name=f"{self.name}-writer")

    async def put(self, line: str) -> None:
        if not self.running:
            raise RuntimeError(f"Log writer '{self.name}' is not running.")
        await self._queue.put(line)

    async def close(self) -> None:
        """
        Drain everything queued so far, then stop the consumer.
        """

        if self._consumer is None:
            return
        await self._queue.put(_STOP)
        await self._consumer

    async def _consume(self) -> None:
        while True:
            item = await self._queue.get()
            try:
                if item is _STOP:
                    return
                line = str(item)
                try:
                    await asyncio.to_thread(self._append, line)
                except SinkWriteError as exc:
                    self.write_failures += 1
                    log_event(
                        logger,
                        logging.ERROR,
                        "sink_write_failed",
                        log=self.name,
                        path=str(self.path),
                        line=line,
                        error=str(exc),
                    )
                else:
                    self.lines_written += 1
            finally:
                self._queue.task_done()

    def _append(self, line: str) -> None:
        try:
            with self.path.open("a", encoding="utf-8") as handle:
                handle.write(f"{line}\n")
        except OSError as exc:
            raise SinkWriteError(str(self.path), str(exc)) from exc
