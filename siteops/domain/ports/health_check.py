"""Domain service abstraction for health checks."""

from __future__ import annotations

from typing import Protocol

from siteops.domain.entities.health import SystemHealth


class IHealthCheckService(Protocol):
    """Interface for retrieving system health information."""

    async def run_health_checks(self) -> SystemHealth:
        """Probe every dependency concurrently and aggregate the results."""
        ...
