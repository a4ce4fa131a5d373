"""
Log dispatch facade - Infrastructure layer.

Decides where a record goes. Development mirrors everything to the
structlog console; production hands it to the configured sink (file or
HTTP). An external webhook, when configured, receives a copy from a
detached task. No path in here raises into the caller.
"""

from __future__ import annotations

import asyncio
import json
from typing import Any, Dict, Optional, Set

import httpx

from siteops.domain.entities.log_record import LogLevel, LogRecord
from siteops.domain.entities.retry import API_RETRY_POLICY, RetryPolicy
from siteops.domain.ports.log_sink import ILogSink
from siteops.domain.services.retry import with_retry
from siteops.shared import EnumEnvironment, get_logger

logger = get_logger(__name__)
console = get_logger("siteops.console")

_CONSOLE_METHODS = {
    LogLevel.ERROR: "error",
    LogLevel.WARN: "warning",
    LogLevel.INFO: "info",
    LogLevel.DEBUG: "debug",
}


def format_console_entry(record: LogRecord) -> str:
    """``[timestamp] LEVEL: message {context}`` plus the stack when present."""
    payload = record.to_dict()
    context = json.dumps(record.context, default=str) if record.context else ""
    stack = ""
    if record.error is not None:
        stack = f"\nError: {record.error.stack or record.error.message}"
    return (
        f"[{payload['timestamp']}] {record.level.value.upper()}: "
        f"{record.message} {context}{stack}"
    )


class LogDispatcher:
    """Route log records to console, sink and webhook."""

    def __init__(
        self,
        environment: str,
        sink: ILogSink,
        *,
        webhook_url: Optional[str] = None,
        service_name: str = "gitmesh-ce-website",
        min_level: LogLevel | str = LogLevel.INFO,
        webhook_retry_policy: RetryPolicy = API_RETRY_POLICY,
        webhook_timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.environment = (
            environment.value if hasattr(environment, "value") else str(environment)
        ).lower()
        self.sink = sink
        self.webhook_url = webhook_url or None
        self.service_name = service_name
        self.min_level = LogLevel(min_level)
        self._webhook_retry_policy = webhook_retry_policy
        self._webhook_timeout = webhook_timeout
        self._transport = transport
        self._pending: Set[asyncio.Task[None]] = set()

    @property
    def is_development(self) -> bool:
        return self.environment == EnumEnvironment.DEVELOPMENT.value

    @property
    def is_production(self) -> bool:
        return self.environment in (
            EnumEnvironment.PRODUCTION.value,
            EnumEnvironment.STAGING.value,
        )

    def should_log(self, level: LogLevel) -> bool:
        return level.rank <= self.min_level.rank

    async def dispatch(
        self,
        message: str,
        error: Optional[BaseException] = None,
        context: Optional[Dict[str, Any]] = None,
        level: LogLevel | str = LogLevel.ERROR,
    ) -> None:
        try:
            record = LogRecord.create(message, error, context, level)
        except Exception as exc:
            logger.error("log_dispatcher.record_failed", error=str(exc))
            return
        await self.emit(record)

    async def error(
        self,
        message: str,
        error: Optional[BaseException] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        await self.dispatch(message, error, context, LogLevel.ERROR)

    async def warn(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        await self.dispatch(message, None, context, LogLevel.WARN)

    async def info(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        await self.dispatch(message, None, context, LogLevel.INFO)

    async def emit(self, record: LogRecord, *, to_sink: bool = True) -> None:
        """
        Deliver an already built record.

        Args:
            record: The record to deliver.
            to_sink: False when the caller has already persisted the record.
        """
        if not self.should_log(record.level):
            return

        if self.is_development:
            self._mirror_to_console(record)

        if self.is_production and to_sink:
            try:
                await self.sink.write(record)
            except Exception as exc:
                logger.error("log_dispatcher.sink_failed", error=str(exc))

        if self.webhook_url:
            self._schedule_webhook(record)

    def _mirror_to_console(self, record: LogRecord) -> None:
        try:
            method = getattr(console, _CONSOLE_METHODS[record.level])
            method(format_console_entry(record))
        except Exception as exc:
            logger.error("log_dispatcher.console_failed", error=str(exc))

    def _schedule_webhook(self, record: LogRecord) -> None:
        try:
            task = asyncio.get_running_loop().create_task(self._send_webhook(record))
        except RuntimeError as exc:
            logger.error("log_dispatcher.webhook_not_scheduled", error=str(exc))
            return
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    def webhook_payload(self, record: LogRecord) -> Dict[str, Any]:
        payload = {
            "service": self.service_name,
            "environment": self.environment,
            **record.to_dict(),
        }
        return json.loads(json.dumps(payload, default=str))

    async def _send_webhook(self, record: LogRecord) -> None:
        payload = self.webhook_payload(record)

        async def _post() -> None:
            async with httpx.AsyncClient(
                timeout=self._webhook_timeout, transport=self._transport
            ) as client:
                response = await client.post(self.webhook_url, json=payload)
                response.raise_for_status()

        try:
            await with_retry(
                _post,
                self._webhook_retry_policy,
                {"component": "log_dispatcher", "action": "webhook"},
            )
        except Exception as exc:
            logger.error(
                "log_dispatcher.webhook_failed", error=str(exc), record_id=record.id
            )

    async def drain(self) -> None:
        """Wait for outstanding webhook deliveries."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
