"""
app/services/resume.py

Startup resume check against the success log.
"""

from __future__ import annotations

from pathlib import Path

SUBSTRING_MODE = "substring"
EXACT_MODE = "exact"


class ResumeIndex:
    """
    Decides which domains a previous run already categorized.

    `substring` mode skips a domain whenever it occurs anywhere in the raw
    log text, so `bank.com` is skipped once `mybank.com,Banking/Finance` has
    been logged. `exact` mode only matches the first field of each row.
    """

    def __init__(self, log_text: str = "", *, mode: str = SUBSTRING_MODE) -> None:
        if mode not in {SUBSTRING_MODE, EXACT_MODE}:
            raise ValueError(f"Unknown resume mode: {mode!r}")
        self._mode = mode
        self._text = log_text
        self._keys = _parse_keys(log_text) if mode == EXACT_MODE else frozenset()

    @classmethod
    def from_log(cls, path: str | Path, *, mode: str = SUBSTRING_MODE) -> "ResumeIndex":
        """
        Build the index from the success log. A missing log skips nothing.
        """

        log_path = Path(path)
        if not log_path.exists():
            return cls("", mode=mode)
        return cls(log_path.read_text(encoding="utf-8", errors="replace"), mode=mode)

    @property
    def mode(self) -> str:
        return self._mode

    def is_done(self, domain: str) -> bool:
        if self._mode == EXACT_MODE:
            return domain in self._keys
        return domain in self._text


def _parse_keys(log_text: str) -> frozenset[str]:
    keys = set()
    for line in log_text.splitlines():
        key = line.split(",", 1)[0].strip()
        if key:
            keys.add(key)
    return frozenset(keys)
