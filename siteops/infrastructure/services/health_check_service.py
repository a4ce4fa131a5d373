"""Infrastructure implementation for system health checks."""

from __future__ import annotations

import asyncio
import json
import os
import tempfile
import time
from datetime import datetime, timezone
from pathlib import Path
from time import perf_counter
from typing import Dict, Iterable, List, Mapping, Optional, Sequence
from uuid import uuid4

from siteops.domain.entities.health import (
    HealthCheck,
    HealthStatus,
    SystemHealth,
    reduce_health_status,
)
from siteops.domain.gateways.connectivity_gateway import IConnectivityGateway
from siteops.domain.ports.health_check import IHealthCheckService
from siteops.shared import OPTIONAL_ENV_VARS, REQUIRED_ENV_VARS, get_logger

logger = get_logger(__name__)

HEALTH_MARKER_FILE = ".health-check"


def _elapsed_ms(start: float) -> float:
    return round((perf_counter() - start) * 1000, 3)


class HealthCheckService(IHealthCheckService):
    """Probe environment, file system and integrations, then aggregate."""

    def __init__(
        self,
        github_gateway: IConnectivityGateway,
        email_gateway: IConnectivityGateway,
        *,
        version: str = "1.0.0",
        environment: str = "development",
        required_env_vars: Sequence[str] = REQUIRED_ENV_VARS,
        optional_env_vars: Sequence[str] = OPTIONAL_ENV_VARS,
        environ: Optional[Mapping[str, str]] = None,
        temp_dir: Optional[str] = None,
        started_at: Optional[float] = None,
    ) -> None:
        self._github_gateway = github_gateway
        self._email_gateway = email_gateway
        self._version = version
        self._environment = (
            environment.value if hasattr(environment, "value") else str(environment)
        )
        self._required_env_vars = tuple(required_env_vars)
        self._optional_env_vars = tuple(optional_env_vars)
        self._environ = environ
        self._temp_dir = temp_dir
        self._started_at = started_at if started_at is not None else time.monotonic()

    def uptime_seconds(self) -> float:
        return max(0.0, time.monotonic() - self._started_at)

    async def run_health_checks(self) -> SystemHealth:
        """Run every probe concurrently and reduce to one snapshot."""
        start = perf_counter()
        logger.info("health.checks.started")

        try:
            checks = await self._collect_checks()
            overall = self._aggregate_status(checks)
            health = SystemHealth(
                overall=overall,
                checks=checks,
                uptime=self.uptime_seconds(),
                version=self._version,
                environment=self._environment,
            )
            logger.info(
                "health.checks.completed",
                overall=overall.value,
                duration_ms=_elapsed_ms(start),
                checks_count=len(checks),
            )
            return health
        except Exception as exc:
            logger.error("health.checks.failed", error=str(exc), exc_info=exc)
            return SystemHealth(
                overall=HealthStatus.UNHEALTHY,
                checks=[
                    HealthCheck(
                        name="Health Check System",
                        status=HealthStatus.UNHEALTHY,
                        message=str(exc) or "Unknown error",
                    )
                ],
                uptime=self.uptime_seconds(),
                version=self._version,
                environment=self._environment,
            )

    async def _collect_checks(self) -> List[HealthCheck]:
        checks = {
            "Environment": asyncio.create_task(self.check_environment()),
            "File System": asyncio.create_task(self.check_file_system()),
            "GitHub API": asyncio.create_task(
                self.check_connectivity("GitHub API", self._github_gateway)
            ),
            "Email Service": asyncio.create_task(
                self.check_connectivity("Email Service", self._email_gateway)
            ),
        }

        results: List[HealthCheck] = []
        for name, task in checks.items():
            try:
                results.append(await task)
            except Exception as exc:  # pragma: no cover - probes catch their own errors
                results.append(
                    HealthCheck(
                        name=name, status=HealthStatus.UNHEALTHY, message=str(exc)
                    )
                )
        return results

    def _aggregate_status(self, checks: Iterable[HealthCheck]) -> HealthStatus:
        return reduce_health_status(check.status for check in checks)

    async def check_environment(self) -> HealthCheck:
        start = perf_counter()
        environ = os.environ if self._environ is None else self._environ

        def _presence(keys: Sequence[str]) -> Dict[str, str]:
            return {key: "configured" if environ.get(key) else "missing" for key in keys}

        required = _presence(self._required_env_vars)
        optional = _presence(self._optional_env_vars)
        missing_required = [key for key, state in required.items() if state == "missing"]
        missing_optional = [key for key, state in optional.items() if state == "missing"]

        if missing_required:
            status = HealthStatus.UNHEALTHY
            message = (
                "Missing required environment variables: "
                + ", ".join(missing_required)
            )
        elif missing_optional:
            status = HealthStatus.DEGRADED
            message = (
                "Missing optional environment variables: "
                + ", ".join(missing_optional)
            )
        else:
            status = HealthStatus.HEALTHY
            message = "All required environment variables configured"

        return HealthCheck(
            name="Environment",
            status=status,
            message=message,
            response_time_ms=_elapsed_ms(start),
            details={"required": required, "optional": optional},
        )

    async def check_file_system(self) -> HealthCheck:
        start = perf_counter()
        temp_dir = Path(self._temp_dir or tempfile.gettempdir())
        marker = temp_dir / f"{HEALTH_MARKER_FILE}-{uuid4().hex}"

        def _round_trip() -> None:
            try:
                marker.write_text(
                    json.dumps({"timestamp": datetime.now(timezone.utc).isoformat()}),
                    encoding="utf-8",
                )
                json.loads(marker.read_text(encoding="utf-8"))
            finally:
                marker.unlink(missing_ok=True)

        try:
            await asyncio.to_thread(_round_trip)
            return HealthCheck(
                name="File System",
                status=HealthStatus.HEALTHY,
                message="Read/write operations successful",
                response_time_ms=_elapsed_ms(start),
            )
        except Exception as exc:
            return HealthCheck(
                name="File System",
                status=HealthStatus.UNHEALTHY,
                message=str(exc) or "Unknown error",
                response_time_ms=_elapsed_ms(start),
                details={"error": repr(exc), "path": str(marker)},
            )

    async def check_connectivity(
        self, name: str, gateway: IConnectivityGateway
    ) -> HealthCheck:
        start = perf_counter()
        try:
            result = await gateway.test_connection()
            details = {**gateway.describe(), **result.details}
            if result.success:
                status, message = HealthStatus.HEALTHY, "Connected successfully"
            elif not result.configured:
                status, message = HealthStatus.DEGRADED, result.error or "Not configured"
            else:
                status, message = HealthStatus.UNHEALTHY, result.error
            return HealthCheck(
                name=name,
                status=status,
                message=message,
                response_time_ms=_elapsed_ms(start),
                details=details,
            )
        except Exception as exc:
            return HealthCheck(
                name=name,
                status=HealthStatus.UNHEALTHY,
                message=str(exc) or "Unknown error",
                response_time_ms=_elapsed_ms(start),
                details={"error": repr(exc)},
            )
