"""
Result sink error types.
"""

from __future__ import annotations


class SinkWriteError(Exception):
    """
    Raised when a result line cannot be appended to its log file.
    """

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__(f"Failed to write to {path}: {message}")
