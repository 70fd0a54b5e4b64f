"""
Run domain categorization from CLI.
"""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import json
import os
import sys

from app.config import get_categorization_settings
from app.scraping.logging_utils import configure_logging
from app.services.categorization_service import CategorizationService
from app.services.domain_loader import DomainListError


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Categorize domains by their homepage content.")
    parser.add_argument("--input", dest="input_path", default=None, help="CSV file with a 'domain' column.")
    parser.add_argument("--success-log", dest="success_log_path", default=None, help="Output log of domain,category rows.")
    parser.add_argument("--failure-log", dest="failure_log_path", default=None, help="Output log of failed domains.")
    parser.add_argument("--limit", dest="limit", type=int, default=None, help="Process at most this many domains.")
    parser.add_argument("--batch-size", dest="batch_size", type=int, default=None, help="Domains processed concurrently per batch.")
    parser.add_argument(
        "--resume-mode",
        dest="resume_mode",
        choices=("substring", "exact"),
        default=None,
        help="How the success log is matched when skipping finished domains.",
    )
    parser.add_argument("--no-shuffle", dest="shuffle", action="store_false", default=None, help="Keep the input order.")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    configure_logging(os.getenv("LOG_LEVEL", "INFO"))

    try:
        settings = get_categorization_settings()
        overrides = {key: value for key, value in vars(args).items() if value is not None}
        if "batch_size" in overrides:
            overrides["batch_size"] = max(1, overrides["batch_size"])
        if "limit" in overrides:
            overrides["limit"] = max(0, overrides["limit"])
        settings = dataclasses.replace(settings, **overrides)

        summary = asyncio.run(CategorizationService(settings=settings).run())
    except (DomainListError, RuntimeError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    print(json.dumps(dataclasses.asdict(summary), indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
