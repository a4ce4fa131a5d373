from __future__ import annotations

import pytest

from siteops.application.dtos.health_dto import SystemHealthDTO
from siteops.application.use_cases import health_use_cases as module
from siteops.application.use_cases.health_use_cases import (
    GetHealthStatusUseCase,
    GetMetricsUseCase,
    GetUptimeStatsUseCase,
    ResetMetricsUseCase,
    RunScheduledHealthCheckUseCase,
)
from siteops.domain.entities.health import HealthCheck, HealthStatus, SystemHealth
from siteops.infrastructure.services.metrics_recorder import MetricsRecorder
from siteops.infrastructure.services.uptime_monitor import UptimeMonitor


class _HealthService:
    def __init__(self, health: SystemHealth | None = None, error: Exception | None = None):
        self._health = health
        self._error = error

    async def run_health_checks(self) -> SystemHealth:
        if self._error is not None:
            raise self._error
        return self._health


def _health(status: HealthStatus) -> SystemHealth:
    return SystemHealth(
        overall=status,
        checks=[
            HealthCheck(name="Environment", status=HealthStatus.HEALTHY),
            HealthCheck(name="Email Service", status=status, message="key rejected"),
        ],
    )


@pytest.fixture(autouse=True)
def _silence_logger(monkeypatch, fake_logger):
    monkeypatch.setattr(module, "logger", fake_logger)
    return fake_logger


@pytest.mark.asyncio
async def test_scheduled_check_records_healthy_outcome(reporter) -> None:
    uptime = UptimeMonitor()
    use_case = RunScheduledHealthCheckUseCase(
        _HealthService(_health(HealthStatus.HEALTHY)), uptime, reporter
    )

    health = await use_case.execute()

    assert health.overall is HealthStatus.HEALTHY
    assert uptime.get_stats().successful_checks == 1
    assert reporter.calls == []


@pytest.mark.asyncio
async def test_scheduled_check_warns_about_failed_checks(reporter, fake_logger) -> None:
    uptime = UptimeMonitor()
    use_case = RunScheduledHealthCheckUseCase(
        _HealthService(_health(HealthStatus.DEGRADED)), uptime, reporter
    )

    await use_case.execute()

    stats = uptime.get_stats()
    assert stats.total_checks == 1
    assert stats.successful_checks == 0
    assert fake_logger.names("warning") == ["health.scheduled.not_healthy"]
    call = reporter.calls[0]
    assert call["level"] == "warn"
    assert call["context"]["failed_checks"] == [
        {"name": "Email Service", "status": "degraded", "message": "key rejected"}
    ]


@pytest.mark.asyncio
async def test_scheduled_check_failure_is_recorded_and_raised(reporter) -> None:
    uptime = UptimeMonitor()
    use_case = RunScheduledHealthCheckUseCase(
        _HealthService(error=RuntimeError("probe crashed")), uptime, reporter
    )

    with pytest.raises(RuntimeError):
        await use_case.execute()

    assert uptime.get_stats().total_checks == 1
    assert uptime.get_stats().successful_checks == 0
    assert reporter.calls[0]["message"] == "Scheduled health check failed"


@pytest.mark.asyncio
async def test_get_health_status_returns_dto() -> None:
    uptime = UptimeMonitor()
    run = RunScheduledHealthCheckUseCase(
        _HealthService(_health(HealthStatus.HEALTHY)), uptime
    )

    dto = await GetHealthStatusUseCase(run).execute()

    assert isinstance(dto, SystemHealthDTO)
    assert dto.overall is HealthStatus.HEALTHY
    assert [check.name for check in dto.checks] == ["Environment", "Email Service"]
    assert uptime.get_stats().total_checks == 1


@pytest.mark.asyncio
async def test_uptime_and_metrics_use_cases() -> None:
    uptime = UptimeMonitor()
    uptime.record_check(True)
    recorder = MetricsRecorder()
    recorder.record_request("GET /health", 12, is_error=True)

    uptime_dto = await GetUptimeStatsUseCase(uptime).execute()
    metrics_dto = await GetMetricsUseCase(recorder).execute()
    reset_dto = await ResetMetricsUseCase(recorder).execute()

    assert uptime_dto.availability == 100.0
    assert metrics_dto.request_count == 1
    assert metrics_dto.endpoints["GET /health"].errors == 1
    assert reset_dto.request_count == 0
    assert reset_dto.endpoints == {}
