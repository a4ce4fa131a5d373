"""Structured error body returned by every failing endpoint."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, Field

from siteops.domain.entities.errors import ErrorCode


class APIErrorDTO(BaseModel):
    code: ErrorCode
    message: str
    details: Optional[Any] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class APIErrorResponseDTO(BaseModel):
    success: bool = False
    error: APIErrorDTO


def create_api_error(
    message: str, code: ErrorCode, details: Optional[Any] = None
) -> APIErrorResponseDTO:
    """Build the ``{success: false, error: {...}}`` body."""
    return APIErrorResponseDTO(
        error=APIErrorDTO(code=code, message=message, details=details)
    )
