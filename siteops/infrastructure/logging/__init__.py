"""Log sinks and the dispatch facade."""

from .file_error_logger import FileErrorLogger
from .http_log_sink import HttpLogSink
from .log_dispatcher import LogDispatcher, format_console_entry

__all__ = ["FileErrorLogger", "HttpLogSink", "LogDispatcher", "format_console_entry"]
