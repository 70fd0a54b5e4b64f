"""
tests/test_category_report.py

Offline category counts over the success log.
"""

from __future__ import annotations

import csv
from pathlib import Path

from app.services.category_report import count_categories, summarize_categories


def _success_log(tmp_path: Path) -> Path:
    path = tmp_path / "categories.csv"
    path.write_text(
        "a.test,Technology\n"
        "b.test,Retail\n"
        "c.test,Technology\n"
        "d.test,Banking/Finance\n"
        "e.test,Retail\n"
        "f.test,Technology\n",
        encoding="utf-8",
    )
    return path


def test_counts_are_sorted_descending_then_alphabetically(tmp_path: Path) -> None:
    counts = count_categories(_success_log(tmp_path))

    assert list(counts["CATEGORY"]) == ["Technology", "Retail", "Banking/Finance"]
    assert list(counts["DOMAIN_count"]) == [3, 2, 1]


def test_writes_report_with_header(tmp_path: Path) -> None:
    output = tmp_path / "category-count.csv"
    source = _success_log(tmp_path)
    before = source.read_text(encoding="utf-8")

    categories = summarize_categories(source, output)

    with output.open(encoding="utf-8", newline="") as handle:
        rows = list(csv.reader(handle))
    assert categories == 3
    assert rows[0] == ["CATEGORY", "DOMAIN_count"]
    assert rows[1] == ["Technology", "3"]
    assert source.read_text(encoding="utf-8") == before
