"""Use cases for health, uptime and request metrics endpoints."""

from typing import Optional

from siteops.application.dtos.health_dto import SystemHealthDTO
from siteops.application.dtos.metrics_dto import PerformanceMetricsDTO, UptimeStatsDTO
from siteops.domain.entities.health import HealthStatus, SystemHealth
from siteops.domain.ports.error_reporter import IErrorReporter
from siteops.domain.ports.health_check import IHealthCheckService
from siteops.infrastructure.services.metrics_recorder import MetricsRecorder
from siteops.infrastructure.services.uptime_monitor import UptimeMonitor
from siteops.shared import get_logger

logger = get_logger(__name__)


class RunScheduledHealthCheckUseCase:
    """Run the health checks and feed the outcome to the uptime monitor."""

    def __init__(
        self,
        health_check_service: IHealthCheckService,
        uptime_monitor: UptimeMonitor,
        reporter: Optional[IErrorReporter] = None,
    ) -> None:
        self._health_check_service = health_check_service
        self._uptime_monitor = uptime_monitor
        self._reporter = reporter

    async def execute(self) -> SystemHealth:
        try:
            health = await self._health_check_service.run_health_checks()
        except Exception as exc:
            logger.error("health.scheduled.failed", error=str(exc), exc_info=exc)
            self._uptime_monitor.record_check(False)
            if self._reporter is not None:
                await self._reporter.dispatch("Scheduled health check failed", exc)
            raise

        is_healthy = health.overall == HealthStatus.HEALTHY
        self._uptime_monitor.record_check(is_healthy)

        if not is_healthy:
            failed_checks = [
                {"name": check.name, "status": check.status.value, "message": check.message}
                for check in health.failed_checks
            ]
            logger.warning(
                "health.scheduled.not_healthy",
                overall=health.overall.value,
                failed_checks=failed_checks,
            )
            if self._reporter is not None:
                await self._reporter.dispatch(
                    "System health check failed",
                    context={
                        "overall": health.overall.value,
                        "failed_checks": failed_checks,
                    },
                    level="warn",
                )

        return health


class GetHealthStatusUseCase:
    """Use case responsible for returning health status."""

    def __init__(self, run_health_check: RunScheduledHealthCheckUseCase) -> None:
        self._run_health_check = run_health_check

    async def execute(self) -> SystemHealthDTO:
        return SystemHealthDTO.from_domain(await self._run_health_check.execute())


class GetUptimeStatsUseCase:
    def __init__(self, uptime_monitor: UptimeMonitor) -> None:
        self._uptime_monitor = uptime_monitor

    async def execute(self) -> UptimeStatsDTO:
        return UptimeStatsDTO.from_domain(self._uptime_monitor.get_stats())


class GetMetricsUseCase:
    def __init__(self, metrics_recorder: MetricsRecorder) -> None:
        self._metrics_recorder = metrics_recorder

    async def execute(self) -> PerformanceMetricsDTO:
        return PerformanceMetricsDTO.from_domain(self._metrics_recorder.get_metrics())


class ResetMetricsUseCase:
    def __init__(self, metrics_recorder: MetricsRecorder) -> None:
        self._metrics_recorder = metrics_recorder

    async def execute(self) -> PerformanceMetricsDTO:
        self._metrics_recorder.reset()
        return PerformanceMetricsDTO.from_domain(self._metrics_recorder.get_metrics())
