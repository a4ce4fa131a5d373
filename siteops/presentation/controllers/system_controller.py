"""System endpoints exposing health, uptime and request metrics."""

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, HTTPException, Response, status

from siteops.application.dtos.health_dto import SystemHealthDTO
from siteops.application.dtos.metrics_dto import PerformanceMetricsDTO, UptimeStatsDTO
from siteops.application.use_cases.health_use_cases import (
    GetHealthStatusUseCase,
    GetMetricsUseCase,
    GetUptimeStatsUseCase,
    ResetMetricsUseCase,
)
from siteops.domain.entities.health import HealthStatus
from siteops.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["System"])


@router.get(
    "/health",
    response_model=SystemHealthDTO,
    responses={503: {"model": SystemHealthDTO, "description": "System unhealthy"}},
)
@inject
async def health(
    response: Response,
    get_health_status_use_case: GetHealthStatusUseCase = Depends(
        Provide["get_health_status_use_case"]
    ),
) -> SystemHealthDTO:
    """Return the health status of the site and its integrations."""
    try:
        health_status = await get_health_status_use_case.execute()
    except Exception as exc:
        logger.error("health.check.failure", error=str(exc), exc_info=exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Unable to retrieve system health status",
        ) from exc

    if health_status.overall == HealthStatus.UNHEALTHY:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    logger.debug("health.check.success", overall=health_status.overall.value)
    return health_status


@router.get("/metrics", response_model=PerformanceMetricsDTO)
@inject
async def metrics(
    get_metrics_use_case: GetMetricsUseCase = Depends(Provide["get_metrics_use_case"]),
) -> PerformanceMetricsDTO:
    """Return request counts, average response time and error rate."""
    return await get_metrics_use_case.execute()


@router.post("/metrics/reset", response_model=PerformanceMetricsDTO)
@inject
async def reset_metrics(
    reset_metrics_use_case: ResetMetricsUseCase = Depends(
        Provide["reset_metrics_use_case"]
    ),
) -> PerformanceMetricsDTO:
    return await reset_metrics_use_case.execute()


@router.get("/uptime", response_model=UptimeStatsDTO)
@inject
async def uptime(
    get_uptime_stats_use_case: GetUptimeStatsUseCase = Depends(
        Provide["get_uptime_stats_use_case"]
    ),
) -> UptimeStatsDTO:
    """Return process uptime and availability over recent health checks."""
    return await get_uptime_stats_use_case.execute()
