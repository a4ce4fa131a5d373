"""
Domain Entities

Value objects and exceptions shared by every layer: classified errors,
retry policies, log records, health snapshots and request metrics.
"""

from .errors import (
    ApplicationError,
    AuthenticationError,
    AuthorizationError,
    ErrorCode,
    ErrorContext,
)
from .health import (
    ConnectionResult,
    HealthCheck,
    HealthStatus,
    SystemHealth,
    UptimeStats,
    reduce_health_status,
)
from .log_record import ErrorSnapshot, LogLevel, LogRecord, RequestInfo, UserInfo
from .metrics import EndpointMetrics, PerformanceMetrics
from .retry import (
    API_RETRY_POLICY,
    EMAIL_RETRY_POLICY,
    GITHUB_RETRY_POLICY,
    RETRY_POLICIES,
    RetryPolicy,
)

__all__ = [
    "API_RETRY_POLICY",
    "ApplicationError",
    "AuthenticationError",
    "AuthorizationError",
    "ConnectionResult",
    "EMAIL_RETRY_POLICY",
    "EndpointMetrics",
    "ErrorCode",
    "ErrorContext",
    "ErrorSnapshot",
    "GITHUB_RETRY_POLICY",
    "HealthCheck",
    "HealthStatus",
    "LogLevel",
    "LogRecord",
    "PerformanceMetrics",
    "RETRY_POLICIES",
    "RequestInfo",
    "RetryPolicy",
    "SystemHealth",
    "UptimeStats",
    "UserInfo",
    "reduce_health_status",
]
