"""Reporting hook used by retry and handler boundaries."""

from __future__ import annotations

from typing import Any, Dict, Optional, Protocol

from siteops.domain.entities.log_record import LogLevel


class IErrorReporter(Protocol):
    """Anything that can take a failure and record it without raising."""

    async def dispatch(
        self,
        message: str,
        error: Optional[BaseException] = None,
        context: Optional[Dict[str, Any]] = None,
        level: LogLevel | str = LogLevel.ERROR,
    ) -> None: ...
