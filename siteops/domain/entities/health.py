"""
Health domain entities.

Value objects describing the outcome of individual dependency probes and
the aggregated snapshot served by ``/health``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional


class HealthStatus(str, Enum):
    """Availability of a dependency or of the whole system."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


@dataclass(slots=True)
class HealthCheck:
    """Outcome of probing one dependency."""

    name: str
    status: HealthStatus
    message: Optional[str] = None
    response_time_ms: Optional[float] = None
    last_checked: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    details: Dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class SystemHealth:
    """Aggregated health for the application."""

    overall: HealthStatus
    checks: List[HealthCheck] = field(default_factory=list)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    uptime: float = 0.0
    version: str = "1.0.0"
    environment: str = "development"

    @property
    def failed_checks(self) -> List[HealthCheck]:
        return [check for check in self.checks if check.status != HealthStatus.HEALTHY]


def reduce_health_status(statuses: Iterable[HealthStatus]) -> HealthStatus:
    """Unhealthy wins over degraded, degraded over healthy."""
    has_degraded = False
    for status in statuses:
        if status == HealthStatus.UNHEALTHY:
            return HealthStatus.UNHEALTHY
        if status == HealthStatus.DEGRADED:
            has_degraded = True
    return HealthStatus.DEGRADED if has_degraded else HealthStatus.HEALTHY


@dataclass(frozen=True, slots=True)
class ConnectionResult:
    """What an integration reports when asked to test its connection.

    ``configured`` is false when the integration was never set up; callers
    treat that as degraded rather than failed.
    """

    success: bool
    error: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)
    configured: bool = True


@dataclass(frozen=True, slots=True)
class UptimeStats:
    uptime_ms: int
    uptime_formatted: str
    availability: float
    total_checks: int
    recent_checks: int
    successful_checks: int
