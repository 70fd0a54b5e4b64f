"""
app/services/category_report.py

Offline category counts over the success log.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from app.scraping.logging_utils import log_event

logger = logging.getLogger(__name__)

DOMAIN_COLUMN = "DOMAIN"
CATEGORY_COLUMN = "CATEGORY"
COUNT_COLUMN = "DOMAIN_count"


def count_categories(success_log_path: str | Path) -> pd.DataFrame:
    """
    Return one row per category with its domain count, largest first.

    Categories with equal counts are ordered alphabetically.
    """

    frame = pd.read_csv(
        success_log_path,
        header=None,
        names=[DOMAIN_COLUMN, CATEGORY_COLUMN],
        usecols=[0, 1],
        dtype=str,
        keep_default_na=False,
    )
    counts = (
        frame.groupby(CATEGORY_COLUMN)[DOMAIN_COLUMN]
        .count()
        .rename(COUNT_COLUMN)
        .reset_index()
    )
    return counts.sort_values(
        by=[COUNT_COLUMN, CATEGORY_COLUMN],
        ascending=[False, True],
        kind="stable",
    ).reset_index(drop=True)


def summarize_categories(success_log_path: str | Path, output_path: str | Path) -> int:
    """
    Write category counts as CSV with a header and return the category count.
    """

    counts = count_categories(success_log_path)
    counts.to_csv(output_path, index=False)
    log_event(
        logger,
        logging.INFO,
        "category_report_written",
        source=str(success_log_path),
        output=str(output_path),
        categories=len(counts),
    )
    return len(counts)
