"""
Domain Errors

Structured application errors carrying a classification code, an HTTP-like
status, retryability and the context in which the failure was detected.
"""

from __future__ import annotations

import traceback
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional

from .log_record import parse_timestamp


class ErrorCode(str, Enum):
    """Closed set of error classifications exposed to API clients."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"
    AUTHORIZATION_ERROR = "AUTHORIZATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"
    GITHUB_API_ERROR = "GITHUB_API_ERROR"
    EMAIL_SERVICE_ERROR = "EMAIL_SERVICE_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


def _coerce_timestamp(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return parse_timestamp(value)
        except ValueError:
            return None
    return None


@dataclass(frozen=True, slots=True)
class ErrorContext:
    """Where and for whom a failure happened."""

    component: Optional[str] = None
    action: Optional[str] = None
    user_id: Optional[str] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    metadata: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def build(cls, values: Optional[Dict[str, Any]] = None) -> "ErrorContext":
        """Create a context from a loose mapping; unknown keys go to metadata.

        A ``timestamp`` that is neither a datetime nor an ISO-8601 string is
        kept in metadata and the context is stamped with the current time.
        """
        values = dict(values or {})
        known = {
            key: values.pop(key)
            for key in ("component", "action", "user_id")
            if values.get(key) is not None
        }
        timestamp = _coerce_timestamp(values.get("timestamp"))
        if timestamp is not None:
            known["timestamp"] = timestamp
            values.pop("timestamp")
        elif values.get("timestamp") is None:
            values.pop("timestamp", None)
        metadata = dict(values.pop("metadata", None) or {})
        metadata.update(values)
        return cls(metadata=metadata, **known)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "component": self.component,
            "action": self.action,
            "user_id": self.user_id,
            "timestamp": self.timestamp.isoformat(),
            "metadata": dict(self.metadata),
        }


class ApplicationError(Exception):
    """Base class for classified application failures."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        status_code: int = 500,
        context: Optional[ErrorContext | Dict[str, Any]] = None,
        is_retryable: bool = False,
        original_error: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self._message = message
        self._code = code
        self._status_code = status_code
        self._context = (
            context
            if isinstance(context, ErrorContext)
            else ErrorContext.build(context)
        )
        self._is_retryable = is_retryable
        self._original_error = original_error
        if original_error is not None:
            self.__cause__ = original_error

    @property
    def message(self) -> str:
        return self._message

    @property
    def code(self) -> ErrorCode:
        return self._code

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def context(self) -> ErrorContext:
        return self._context

    @property
    def is_retryable(self) -> bool:
        return self._is_retryable

    @property
    def original_error(self) -> Optional[BaseException]:
        return self._original_error

    def to_dict(self) -> Dict[str, Any]:
        stack = (
            "".join(traceback.format_exception(self))
            if self.__traceback__ is not None
            else None
        )
        return {
            "name": type(self).__name__,
            "message": self.message,
            "code": self.code.value,
            "status_code": self.status_code,
            "context": self.context.to_dict(),
            "is_retryable": self.is_retryable,
            "stack": stack,
        }


class AuthenticationError(ApplicationError):
    """Raised when a request carries no valid credential."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.AUTHENTICATION_ERROR, 401, context)


class AuthorizationError(ApplicationError):
    """Raised when the caller is known but may not perform the action."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message, ErrorCode.AUTHORIZATION_ERROR, 403, context)
