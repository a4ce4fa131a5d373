"""Destination for persisted log records."""

from __future__ import annotations

from typing import Protocol

from siteops.domain.entities.log_record import LogRecord


class ILogSink(Protocol):
    """
    Capability to persist a log record.

    Processes with file access write directly; anything else submits the
    record to the server over HTTP. Implementations must not raise.
    """

    async def write(self, record: LogRecord) -> None: ...
