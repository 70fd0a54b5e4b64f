"""
Result sink exports.
"""

from app.storage.base import ResultSink
from app.storage.errors import SinkWriteError
from app.storage.file_sink import FileResultSink
from app.storage.log_writer import AppendOnlyLogWriter

__all__ = ["AppendOnlyLogWriter", "FileResultSink", "ResultSink", "SinkWriteError"]
