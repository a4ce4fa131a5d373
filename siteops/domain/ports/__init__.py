"""Ports implemented by the infrastructure layer."""

from .error_reporter import IErrorReporter
from .health_check import IHealthCheckService
from .log_sink import ILogSink

__all__ = ["IErrorReporter", "IHealthCheckService", "ILogSink"]
