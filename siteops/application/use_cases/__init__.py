"""
Use Cases Package - Application Layer

Use cases orchestrate the health, metrics and error log services for the
HTTP controllers and the scheduler.
"""

from .health_use_cases import (
    GetHealthStatusUseCase,
    GetMetricsUseCase,
    GetUptimeStatsUseCase,
    ResetMetricsUseCase,
    RunScheduledHealthCheckUseCase,
)
from .log_use_cases import ClearLogsUseCase, GetRecentLogsUseCase, SubmitClientErrorUseCase

__all__ = [
    "ClearLogsUseCase",
    "GetHealthStatusUseCase",
    "GetMetricsUseCase",
    "GetRecentLogsUseCase",
    "GetUptimeStatsUseCase",
    "ResetMetricsUseCase",
    "RunScheduledHealthCheckUseCase",
    "SubmitClientErrorUseCase",
]
