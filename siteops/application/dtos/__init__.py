"""
DTOs Package - Application Layer

Data Transfer Objects exchanged between the application layer and the
HTTP controllers.
"""

from .error_dto import APIErrorDTO, APIErrorResponseDTO, create_api_error
from .health_dto import HealthCheckDTO, SystemHealthDTO
from .log_dto import (
    ClearLogsResultDTO,
    ClientErrorReportDTO,
    ErrorSnapshotDTO,
    LogRecordDTO,
    LogSubmissionAckDTO,
    RecentLogsDTO,
)
from .metrics_dto import EndpointMetricsDTO, PerformanceMetricsDTO, UptimeStatsDTO

__all__ = [
    "APIErrorDTO",
    "APIErrorResponseDTO",
    "ClearLogsResultDTO",
    "ClientErrorReportDTO",
    "EndpointMetricsDTO",
    "ErrorSnapshotDTO",
    "HealthCheckDTO",
    "LogRecordDTO",
    "LogSubmissionAckDTO",
    "PerformanceMetricsDTO",
    "RecentLogsDTO",
    "SystemHealthDTO",
    "UptimeStatsDTO",
    "create_api_error",
]
