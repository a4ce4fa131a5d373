"""DTOs for request metrics and uptime statistics."""

from __future__ import annotations

from datetime import datetime
from typing import Dict

from pydantic import BaseModel, Field

from siteops.domain.entities.health import UptimeStats
from siteops.domain.entities.metrics import PerformanceMetrics


class EndpointMetricsDTO(BaseModel):
    count: int = Field(description="Requests handled")
    total_time_ms: float = Field(description="Cumulative handling time")
    errors: int = Field(description="Requests that failed")


class PerformanceMetricsDTO(BaseModel):
    """Snapshot of the request metrics recorder."""

    request_count: int
    average_response_time_ms: float
    error_rate: float = Field(description="Errors per request, 0..1")
    last_reset: datetime
    endpoints: Dict[str, EndpointMetricsDTO] = Field(default_factory=dict)

    @classmethod
    def from_domain(cls, metrics: PerformanceMetrics) -> "PerformanceMetricsDTO":
        return cls(
            request_count=metrics.request_count,
            average_response_time_ms=metrics.average_response_time_ms,
            error_rate=metrics.error_rate,
            last_reset=metrics.last_reset,
            endpoints={
                name: EndpointMetricsDTO(
                    count=ep.count, total_time_ms=ep.total_time_ms, errors=ep.errors
                )
                for name, ep in metrics.endpoints.items()
            },
        )


class UptimeStatsDTO(BaseModel):
    uptime_ms: int
    uptime_formatted: str
    availability: float = Field(description="Percent of recent checks that passed")
    total_checks: int
    recent_checks: int
    successful_checks: int

    @classmethod
    def from_domain(cls, stats: UptimeStats) -> "UptimeStatsDTO":
        return cls(
            uptime_ms=stats.uptime_ms,
            uptime_formatted=stats.uptime_formatted,
            availability=stats.availability,
            total_checks=stats.total_checks,
            recent_checks=stats.recent_checks,
            successful_checks=stats.successful_checks,
        )
