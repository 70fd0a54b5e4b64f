"""
app/services/domain_loader.py

Loads the deduplicated domain list from an ASN-style CSV export.

Expected header (IPinfo ASN layout): start_ip,end_ip,asn,name,domain.
Only the `domain` column is required; other columns are ignored.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from app.domain.categorization import normalize_domain
from app.scraping.logging_utils import log_event

logger = logging.getLogger(__name__)

DOMAIN_COLUMN = "domain"


class DomainListError(Exception):
    """
    Raised when the input domain list cannot be read. Fatal for a run.
    """


def load_domains(path: str | Path) -> list[str]:
    """
    Return a sorted, deduplicated list of lowercase, trimmed domains.

    Rows that are too short to carry a domain value are skipped, as are
    blank domains.
    """

    csv_path = Path(path)
    if not csv_path.is_file():
        raise DomainListError(f"Domain list not found: {csv_path}")

    domains: set[str] = set()
    rows_skipped = 0
    try:
        with csv_path.open("r", encoding="utf-8-sig", newline="") as handle:
            reader = csv.DictReader(handle)
            headers = [header.strip().lower() for header in reader.fieldnames or []]
            if DOMAIN_COLUMN not in headers:
                raise DomainListError(
                    f"Domain list {csv_path} has no '{DOMAIN_COLUMN}' column."
                )
            reader.fieldnames = headers

            for raw_row in reader:
                value = raw_row.get(DOMAIN_COLUMN)
                if not isinstance(value, str):
                    rows_skipped += 1
                    continue
                domain = normalize_domain(value)
                if domain:
                    domains.add(domain)
    except UnicodeDecodeError as exc:
        raise DomainListError(f"Domain list {csv_path} must be UTF-8 encoded.") from exc
    except csv.Error as exc:
        raise DomainListError(f"Invalid CSV format in {csv_path}: {exc}") from exc
    except OSError as exc:
        raise DomainListError(f"Cannot read domain list {csv_path}: {exc}") from exc

    loaded = sorted(domains)
    log_event(
        logger,
        logging.INFO,
        "domains_loaded",
        path=str(csv_path),
        domains=len(loaded),
        rows_skipped=rows_skipped,
    )
    return loaded
