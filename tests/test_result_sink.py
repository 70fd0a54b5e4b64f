"""
tests/test_result_sink.py

Append-only result logs fed by single-consumer writers.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import pytest

from app.storage import AppendOnlyLogWriter, FileResultSink
from llm_classification.schema import Classification


def _read_lines(path: Path) -> list[str]:
    return path.read_text(encoding="utf-8").splitlines()


def test_success_and_failure_go_to_separate_logs(tmp_path: Path) -> None:
    success_log = tmp_path / "categories.csv"
    failure_log = tmp_path / "failures.txt"

    async def scenario() -> None:
        async with FileResultSink(
            success_log_path=success_log,
            failure_log_path=failure_log,
        ) as sink:
            await sink.record_success(Classification(domain="example.com", category="Technology"))
            await sink.record_failure("deadhost.test")

    asyncio.run(scenario())

    assert _read_lines(success_log) == ["example.com,Technology"]
    assert _read_lines(failure_log) == ["deadhost.test"]


def test_logs_are_appended_not_truncated(tmp_path: Path) -> None:
    success_log = tmp_path / "categories.csv"
    success_log.write_text("seen.test,Retail\n", encoding="utf-8")

    async def scenario() -> None:
        async with FileResultSink(
            success_log_path=success_log,
            failure_log_path=tmp_path / "failures.txt",
        ) as sink:
            await sink.record_success(Classification(domain="new.test", category="News"))

    asyncio.run(scenario())

    assert _read_lines(success_log) == ["seen.test,Retail", "new.test,News"]


def test_duplicate_records_produce_duplicate_lines(tmp_path: Path) -> None:
    success_log = tmp_path / "categories.csv"
    failure_log = tmp_path / "failures.txt"

    async def scenario() -> None:
        async with FileResultSink(
            success_log_path=success_log,
            failure_log_path=failure_log,
        ) as sink:
            for _ in range(2):
                await sink.record_success(Classification(domain="twice.test", category="Other"))
                await sink.record_failure("twice.test")

    asyncio.run(scenario())

    assert _read_lines(success_log) == ["twice.test,Other", "twice.test,Other"]
    assert _read_lines(failure_log) == ["twice.test", "twice.test"]


def test_concurrent_producers_never_interleave_lines(tmp_path: Path) -> None:
    failure_log = tmp_path / "failures.txt"
    domains = [f"host{index:03d}.test" for index in range(200)]

    async def scenario() -> AppendOnlyLogWriter:
        writer = AppendOnlyLogWriter(path=failure_log, name="failure", queue_size=4)
        writer.start()
        await asyncio.gather(*(writer.put(domain) for domain in domains))
        await writer.close()
        return writer

    writer = asyncio.run(scenario())

    lines = _read_lines(failure_log)
    assert sorted(lines) == domains
    assert writer.lines_written == 200
    assert writer.write_failures == 0


def test_single_producer_order_is_preserved(tmp_path: Path) -> None:
    log = tmp_path / "ordered.txt"

    async def scenario() -> None:
        writer = AppendOnlyLogWriter(path=log, name="ordered", queue_size=2)
        writer.start()
        for index in range(20):
            await writer.put(str(index))
        await writer.close()

    asyncio.run(scenario())

    assert _read_lines(log) == [str(index) for index in range(20)]


def test_write_failure_is_logged_and_dropped(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    unwritable = tmp_path / "is_a_directory"
    unwritable.mkdir()

    async def scenario() -> AppendOnlyLogWriter:
        writer = AppendOnlyLogWriter(path=unwritable, name="failure")
        writer.start()
        await writer.put("first.test")
        await writer.put("second.test")
        await writer.close()
        return writer

    with caplog.at_level(logging.ERROR, logger="app.storage.log_writer"):
        writer = asyncio.run(scenario())

    assert writer.write_failures == 2
    assert writer.lines_written == 0
    assert "sink_write_failed" in caplog.text


def test_put_before_start_is_rejected(tmp_path: Path) -> None:
    async def scenario() -> None:
        writer = AppendOnlyLogWriter(path=tmp_path / "x.txt", name="x")
        await writer.put("too-early.test")

    with pytest.raises(RuntimeError):
        asyncio.run(scenario())


def test_files_are_created_on_first_write_only(tmp_path: Path) -> None:
    success_log = tmp_path / "categories.csv"
    failure_log = tmp_path / "failures.txt"

    async def scenario() -> None:
        async with FileResultSink(
            success_log_path=success_log,
            failure_log_path=failure_log,
        ) as sink:
            await sink.record_failure("only-failure.test")

    asyncio.run(scenario())

    assert not success_log.exists()
    assert _read_lines(failure_log) == ["only-failure.test"]
