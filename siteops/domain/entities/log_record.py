"""
Log record entities.

A ``LogRecord`` is the unit persisted by the error log: one JSON object per
line, append-only, never modified once written.
"""

from __future__ import annotations

import random
import string
import time
import traceback
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

_ID_ALPHABET = string.ascii_lowercase + string.digits


class LogLevel(str, Enum):
    """Severity of a persisted record, most severe first."""

    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"

    @property
    def rank(self) -> int:
        return list(LogLevel).index(self)


def generate_log_id() -> str:
    """Time-based id with a random suffix; unique enough, not cryptographic."""
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"{int(time.time() * 1000)}-{suffix}"


def format_timestamp(value: datetime) -> str:
    """ISO-8601 in UTC with millisecond precision and a ``Z`` suffix."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    text = value.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return text.replace("+00:00", "Z")


def parse_timestamp(value: str) -> datetime:
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True, slots=True)
class ErrorSnapshot:
    """Serializable view of an exception."""

    name: str
    message: str
    stack: Optional[str] = None

    @classmethod
    def from_exception(cls, error: BaseException) -> "ErrorSnapshot":
        stack = None
        if error.__traceback__ is not None:
            stack = "".join(traceback.format_exception(error)).rstrip()
        return cls(name=type(error).__name__, message=str(error), stack=stack)


@dataclass(frozen=True, slots=True)
class UserInfo:
    id: Optional[str] = None
    email: Optional[str] = None


@dataclass(frozen=True, slots=True)
class RequestInfo:
    method: Optional[str] = None
    url: Optional[str] = None
    user_agent: Optional[str] = None
    ip: Optional[str] = None


@dataclass(frozen=True, slots=True)
class LogRecord:
    """A single error, warning or informational entry."""

    message: str
    level: LogLevel = LogLevel.ERROR
    id: str = field(default_factory=generate_log_id)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    error: Optional[ErrorSnapshot] = None
    context: Optional[Dict[str, Any]] = None
    user: Optional[UserInfo] = None
    request: Optional[RequestInfo] = None

    @classmethod
    def create(
        cls,
        message: str,
        error: Optional[BaseException | ErrorSnapshot] = None,
        context: Optional[Dict[str, Any]] = None,
        level: LogLevel | str = LogLevel.ERROR,
    ) -> "LogRecord":
        if isinstance(error, BaseException):
            error = ErrorSnapshot.from_exception(error)
        return cls(
            message=message,
            level=LogLevel(level),
            error=error,
            context=context,
        )

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "id": self.id,
            "timestamp": format_timestamp(self.timestamp),
            "level": self.level.value,
            "message": self.message,
        }
        if self.error is not None:
            payload["error"] = {
                "name": self.error.name,
                "message": self.error.message,
                "stack": self.error.stack,
            }
        if self.context is not None:
            payload["context"] = self.context
        if self.user is not None:
            payload["user"] = {"id": self.user.id, "email": self.user.email}
        if self.request is not None:
            payload["request"] = {
                "method": self.request.method,
                "url": self.request.url,
                "user_agent": self.request.user_agent,
                "ip": self.request.ip,
            }
        return payload

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "LogRecord":
        """
        Rebuild a record read back from a log file.

        Raises:
            KeyError, TypeError, ValueError: if the payload is not a record.
        """
        error = payload.get("error")
        user = payload.get("user")
        request = payload.get("request")
        return cls(
            id=str(payload["id"]),
            timestamp=parse_timestamp(payload["timestamp"]),
            level=LogLevel(payload["level"]),
            message=str(payload["message"]),
            error=ErrorSnapshot(**error) if error else None,
            context=payload.get("context"),
            user=UserInfo(**user) if user else None,
            request=RequestInfo(**request) if request else None,
        )
