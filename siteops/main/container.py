"""
Dependency container injection module - Main Layer

This module implements the dependency injection container
to simplify the management and lifecycle of dependencies
in the application.
"""

from contextlib import asynccontextmanager
from typing import Any

from dependency_injector import containers, providers

from siteops.application.use_cases.health_use_cases import (
    GetHealthStatusUseCase,
    GetMetricsUseCase,
    GetUptimeStatsUseCase,
    ResetMetricsUseCase,
    RunScheduledHealthCheckUseCase,
)
from siteops.application.use_cases.log_use_cases import (
    ClearLogsUseCase,
    GetRecentLogsUseCase,
    SubmitClientErrorUseCase,
)
from siteops.domain.entities.log_record import LogLevel
from siteops.infrastructure.gateways.email_gateway import EmailGateway
from siteops.infrastructure.gateways.github_gateway import GitHubGateway
from siteops.infrastructure.logging.file_error_logger import FileErrorLogger
from siteops.infrastructure.logging.http_log_sink import HttpLogSink
from siteops.infrastructure.logging.log_dispatcher import LogDispatcher
from siteops.infrastructure.services.health_check_scheduler import (
    HealthCheckScheduler,
)
from siteops.infrastructure.services.health_check_service import HealthCheckService
from siteops.infrastructure.services.metrics_recorder import MetricsRecorder
from siteops.infrastructure.services.uptime_monitor import UptimeMonitor
from siteops.shared import get_logger

from .config import AppSettings

logger = get_logger(__name__)

_DISPATCHER_LEVELS = {
    "DEBUG": LogLevel.DEBUG,
    "INFO": LogLevel.INFO,
    "WARNING": LogLevel.WARN,
    "ERROR": LogLevel.ERROR,
    "CRITICAL": LogLevel.ERROR,
}


def _enum_value(value: Any) -> str:
    return value.value if hasattr(value, "value") else str(value)


def _dispatcher_level(level: Any) -> LogLevel:
    return _DISPATCHER_LEVELS.get(_enum_value(level).upper(), LogLevel.INFO)


class AppContainer(containers.DeclarativeContainer):
    """Composition Root using dependency-injector."""

    wiring_config = containers.WiringConfiguration(packages=["..presentation"])

    # Settings
    config = providers.Configuration()

    environment = providers.Callable(_enum_value, config.environment)

    # Logging
    file_error_logger = providers.Singleton(
        FileErrorLogger,
        log_dir=config.logging.dir,
        max_log_files=config.logging.max_files,
        max_log_size=config.logging.max_size_bytes,
    )

    http_log_sink = providers.Singleton(
        HttpLogSink,
        endpoint_url=config.logging.endpoint_url,
    )

    log_sink = providers.Selector(
        providers.Callable(_enum_value, config.logging.sink),
        file=file_error_logger,
        http=http_log_sink,
    )

    log_dispatcher = providers.Singleton(
        LogDispatcher,
        environment=environment,
        sink=log_sink,
        webhook_url=config.logging.webhook_url,
        service_name=config.logging.service_name,
        min_level=providers.Callable(_dispatcher_level, config.logging.level),
    )

    # Gateways
    github_gateway = providers.Singleton(
        GitHubGateway,
        api_url=config.github.api_url,
        token=config.github.token,
        repo=config.github.repo,
    )

    email_gateway = providers.Singleton(
        EmailGateway,
        api_key=config.email.sendgrid_api_key,
        from_email=config.email.from_email,
        provider=config.email.provider,
        api_url=config.email.api_url,
    )

    # Monitoring
    health_check_service = providers.Singleton(
        HealthCheckService,
        github_gateway=github_gateway,
        email_gateway=email_gateway,
        version=config.site.version,
        environment=environment,
        temp_dir=config.monitoring.temp_dir,
    )

    metrics_recorder = providers.Singleton(MetricsRecorder)

    uptime_monitor = providers.Singleton(
        UptimeMonitor,
        max_checks=config.monitoring.uptime_max_checks,
        window=config.monitoring.uptime_window,
    )

    # Application (use cases)
    run_scheduled_health_check_use_case = providers.Factory(
        RunScheduledHealthCheckUseCase,
        health_check_service=health_check_service,
        uptime_monitor=uptime_monitor,
        reporter=log_dispatcher,
    )

    get_health_status_use_case = providers.Factory(
        GetHealthStatusUseCase,
        run_health_check=run_scheduled_health_check_use_case,
    )

    get_uptime_stats_use_case = providers.Factory(
        GetUptimeStatsUseCase,
        uptime_monitor=uptime_monitor,
    )

    get_metrics_use_case = providers.Factory(
        GetMetricsUseCase,
        metrics_recorder=metrics_recorder,
    )

    reset_metrics_use_case = providers.Factory(
        ResetMetricsUseCase,
        metrics_recorder=metrics_recorder,
    )

    submit_client_error_use_case = providers.Factory(
        SubmitClientErrorUseCase,
        error_logger=file_error_logger,
        log_dispatcher=log_dispatcher,
    )

    get_recent_logs_use_case = providers.Factory(
        GetRecentLogsUseCase,
        error_logger=file_error_logger,
    )

    clear_logs_use_case = providers.Factory(
        ClearLogsUseCase,
        error_logger=file_error_logger,
    )

    health_check_scheduler = providers.Singleton(
        HealthCheckScheduler,
        run_check=run_scheduled_health_check_use_case.provided.execute,
        interval_seconds=config.monitoring.health_check_interval_seconds,
    )


# -------------------------
# Global Container Instance
# -------------------------
_app_container: AppContainer | None = None


def init_container(settings: AppSettings) -> AppContainer:
    """Initialize global container with application settings."""

    global _app_container

    container = AppContainer()
    container.config.from_pydantic(settings)
    _app_container = container
    return container


def get_container() -> AppContainer:
    """Get the initialized global container."""

    if _app_container is None:
        raise RuntimeError("Container has not been initialized yet")

    return _app_container


@asynccontextmanager
async def app_lifespan():
    """
    Centralized lifecycle management for background work.

    Starts the health check scheduler on startup. On shutdown it stops the
    scheduler and waits for webhook deliveries still in flight.
    """
    container = get_container()

    scheduler = container.health_check_scheduler()
    log_dispatcher = container.log_dispatcher()

    try:
        await scheduler.start()
        logger.info("container.resources.initialized", scheduler=scheduler.running)
        yield container

    finally:
        logger.info("container.scheduler.stop")
        await scheduler.stop()

        logger.info("container.log_dispatcher.drain")
        await log_dispatcher.drain()

        logger.info("container.resources.shutdown")
