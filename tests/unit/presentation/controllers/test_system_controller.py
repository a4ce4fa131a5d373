from __future__ import annotations

import pytest
from fastapi import HTTPException, Response

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
from siteops.presentation.controllers.system_controller import (
    health,
    metrics,
    reset_metrics,
    uptime,
)


class _HealthService:
    def __init__(self, status: HealthStatus):
        self._health = SystemHealth(
            overall=status,
            checks=[HealthCheck(name="File System", status=status)],
        )

    async def run_health_checks(self) -> SystemHealth:
        return self._health


def _use_case(status: HealthStatus) -> GetHealthStatusUseCase:
    return GetHealthStatusUseCase(
        RunScheduledHealthCheckUseCase(_HealthService(status), UptimeMonitor())
    )


@pytest.mark.asyncio
async def test_health_endpoint_returns_status():
    response = Response()

    dto = await health(
        response=response,
        get_health_status_use_case=_use_case(HealthStatus.HEALTHY),
    )

    assert dto.overall is HealthStatus.HEALTHY
    assert dto.checks[0].name == "File System"
    assert response.status_code == 200


@pytest.mark.asyncio
async def test_degraded_health_is_still_ok():
    response = Response()

    await health(response=response, get_health_status_use_case=_use_case(HealthStatus.DEGRADED))

    assert response.status_code == 200


@pytest.mark.asyncio
async def test_unhealthy_status_sets_503():
    response = Response()

    dto = await health(
        response=response,
        get_health_status_use_case=_use_case(HealthStatus.UNHEALTHY),
    )

    assert dto.overall is HealthStatus.UNHEALTHY
    assert response.status_code == 503


@pytest.mark.asyncio
async def test_health_endpoint_failure_raises_503():
    class _Broken:
        async def execute(self):
            raise RuntimeError("boom")

    with pytest.raises(HTTPException) as exc_info:
        await health(response=Response(), get_health_status_use_case=_Broken())

    assert exc_info.value.status_code == 503


@pytest.mark.asyncio
async def test_metrics_and_uptime_endpoints():
    recorder = MetricsRecorder()
    recorder.record_request("GET /health", 4)
    monitor = UptimeMonitor()
    monitor.record_check(False)

    metrics_dto = await metrics(get_metrics_use_case=GetMetricsUseCase(recorder))
    reset_dto = await reset_metrics(reset_metrics_use_case=ResetMetricsUseCase(recorder))
    uptime_dto = await uptime(get_uptime_stats_use_case=GetUptimeStatsUseCase(monitor))

    assert metrics_dto.request_count == 1
    assert reset_dto.request_count == 0
    assert uptime_dto.availability == 0.0
