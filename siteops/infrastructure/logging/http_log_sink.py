"""Log sink for processes without file access: submit records to the server."""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from siteops.domain.entities.log_record import LogRecord
from siteops.domain.ports.log_sink import ILogSink
from siteops.shared import get_logger

logger = get_logger(__name__)


class HttpLogSink(ILogSink):
    """POST records to the ``/api/errors`` submission endpoint."""

    def __init__(
        self,
        endpoint_url: str,
        *,
        page_url: Optional[str] = None,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.endpoint_url = endpoint_url
        self.page_url = page_url
        self.timeout = timeout
        self._transport = transport

    def build_payload(self, record: LogRecord) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "message": record.message,
            "level": record.level.value,
        }
        if record.error is not None:
            payload["error"] = {
                "name": record.error.name,
                "message": record.error.message,
                "stack": record.error.stack,
            }
        if record.context is not None:
            payload["context"] = record.context
        if self.page_url:
            payload["url"] = self.page_url
        return payload

    async def write(self, record: LogRecord) -> None:
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                response = await client.post(
                    self.endpoint_url, json=self.build_payload(record)
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error(
                "http_log_sink.rejected",
                status_code=exc.response.status_code,
                url=self.endpoint_url,
            )
        except Exception as exc:
            logger.error(
                "http_log_sink.submit_failed", error=str(exc), url=self.endpoint_url
            )
