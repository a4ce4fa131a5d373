from .health_check_scheduler import HealthCheckScheduler
from .health_check_service import HealthCheckService
from .metrics_recorder import MetricsRecorder, with_metrics
from .uptime_monitor import UptimeMonitor, format_uptime

__all__ = [
    "HealthCheckScheduler",
    "HealthCheckService",
    "MetricsRecorder",
    "UptimeMonitor",
    "format_uptime",
    "with_metrics",
]
