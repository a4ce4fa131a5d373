"""DTOs for error log submission and retrieval."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator

from siteops.domain.entities.log_record import LogLevel, LogRecord

REPORTABLE_LEVELS = (LogLevel.ERROR, LogLevel.WARN, LogLevel.INFO)


class ErrorSnapshotDTO(BaseModel):
    name: str = Field(default="Error")
    message: str = Field(default="")
    stack: Optional[str] = None


class ClientErrorReportDTO(BaseModel):
    """Body accepted by ``POST /api/errors``."""

    message: str = Field(min_length=1, description="What went wrong")
    error: Optional[ErrorSnapshotDTO] = None
    context: Optional[Dict[str, Any]] = None
    level: LogLevel = Field(default=LogLevel.ERROR)
    url: Optional[str] = Field(default=None, description="Page the error came from")

    @field_validator("level")
    @classmethod
    def reject_debug_level(cls, value: LogLevel) -> LogLevel:
        """Debug output stays on the console; it is never persisted."""
        if value not in REPORTABLE_LEVELS:
            raise ValueError("level must be one of: error, warn, info")
        return value

    model_config = {
        "json_schema_extra": {
            "example": {
                "message": "Failed to load vlogs",
                "error": {
                    "name": "TypeError",
                    "message": "Cannot read properties of undefined",
                    "stack": "TypeError: Cannot read properties of undefined\n"
                    "    at VlogsPage",
                },
                "context": {"component": "vlogs-page"},
                "level": "error",
                "url": "https://example.org/vlogs",
            }
        }
    }


class LogRecordDTO(BaseModel):
    id: str
    timestamp: datetime
    level: LogLevel
    message: str
    error: Optional[ErrorSnapshotDTO] = None
    context: Optional[Dict[str, Any]] = None
    user: Optional[Dict[str, Any]] = None
    request: Optional[Dict[str, Any]] = None

    @classmethod
    def from_domain(
        cls, record: LogRecord, include_stack: bool = True
    ) -> "LogRecordDTO":
        payload = record.to_dict()
        error = payload.get("error")
        if error and not include_stack:
            error = {**error, "stack": None}
        return cls(
            id=record.id,
            timestamp=record.timestamp,
            level=record.level,
            message=record.message,
            error=error,
            context=record.context,
            user=payload.get("user"),
            request=payload.get("request"),
        )


class LogSubmissionAckDTO(BaseModel):
    success: bool
    error: Optional[str] = None


class RecentLogsDTO(BaseModel):
    count: int
    logs: List[LogRecordDTO] = Field(default_factory=list)


class ClearLogsResultDTO(BaseModel):
    removed: List[str] = Field(default_factory=list)
