"""DTOs for the system health response."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from siteops.domain.entities.health import HealthCheck, HealthStatus, SystemHealth


class HealthCheckDTO(BaseModel):
    """Serializable representation of a single dependency probe."""

    name: str = Field(description="Probe identifier")
    status: HealthStatus = Field(description="Outcome of the probe")
    message: Optional[str] = Field(
        default=None, description="Human readable status note"
    )
    response_time_ms: Optional[float] = Field(
        default=None, description="Probe wall-clock time in milliseconds"
    )
    last_checked: datetime = Field(description="Timestamp of the probe")
    details: Dict[str, Any] = Field(
        default_factory=dict, description="Probe specific diagnostics"
    )

    @classmethod
    def from_domain(cls, check: HealthCheck) -> "HealthCheckDTO":
        return cls(
            name=check.name,
            status=check.status,
            message=check.message,
            response_time_ms=check.response_time_ms,
            last_checked=check.last_checked,
            details=check.details,
        )


class SystemHealthDTO(BaseModel):
    """DTO representing the /health response payload."""

    overall: HealthStatus = Field(description="Overall system status")
    checks: List[HealthCheckDTO] = Field(
        default_factory=list, description="Individual probe results"
    )
    timestamp: datetime = Field(description="When the snapshot was taken")
    uptime: float = Field(description="Process uptime in seconds")
    version: str = Field(description="Application version")
    environment: str = Field(description="Deployment environment")

    @classmethod
    def from_domain(cls, health: SystemHealth) -> "SystemHealthDTO":
        return cls(
            overall=health.overall,
            checks=[HealthCheckDTO.from_domain(check) for check in health.checks],
            timestamp=health.timestamp,
            uptime=health.uptime,
            version=health.version,
            environment=health.environment,
        )

    model_config = {
        "json_schema_extra": {
            "example": {
                "overall": "degraded",
                "checks": [
                    {
                        "name": "Environment",
                        "status": "degraded",
                        "message": "Missing optional environment variables: FROM_EMAIL",
                        "response_time_ms": 0.05,
                        "last_checked": "2024-09-09T12:00:00Z",
                        "details": {
                            "required": {"NEXTAUTH_SECRET": "configured"},
                            "optional": {"FROM_EMAIL": "missing"},
                        },
                    }
                ],
                "timestamp": "2024-09-09T12:00:00Z",
                "uptime": 3600.5,
                "version": "1.0.0",
                "environment": "production",
            }
        }
    }
