"""
Count categorized domains per category.
"""

from __future__ import annotations

import argparse
import os
import sys

from app.scraping.logging_utils import configure_logging
from app.services.category_report import summarize_categories


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Summarize the success log by category.")
    parser.add_argument("--success-log", default="categories.csv", help="Success log to read.")
    parser.add_argument("--output", default="category-count.csv", help="CSV report to write.")
    args = parser.parse_args(argv)
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    try:
        categories = summarize_categories(args.success_log, args.output)
    except (OSError, ValueError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(f"Wrote {categories} categories to {args.output}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
