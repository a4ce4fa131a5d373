from __future__ import annotations

import logging
from dataclasses import dataclass

import structlog

from siteops.shared.logging import (
    _renderer_for,
    configure_logging,
    get_logger,
    update_logging_from_settings,
)


def test_configure_logging_sets_root_handlers(tmp_path) -> None:
    log_file = tmp_path / "siteops.log"
    configure_logging(level="DEBUG", file_path=str(log_file), environment="development")

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert any(isinstance(handler, logging.FileHandler) for handler in root.handlers)

    logger = get_logger(__name__)
    logger.info("structured log test")


def test_configure_logging_quiets_http_client_loggers() -> None:
    configure_logging(level="DEBUG", environment="development")

    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("httpcore").level == logging.WARNING


def test_renderer_depends_on_environment() -> None:
    assert isinstance(_renderer_for("production"), structlog.processors.JSONRenderer)
    assert isinstance(_renderer_for("development"), structlog.dev.ConsoleRenderer)


@dataclass
class _LoggingSettings:
    level: str = "WARNING"
    format: str = "%(message)s"
    file_path: str | None = None


@dataclass
class _Settings:
    logging: _LoggingSettings
    environment: str = "production"


def test_update_logging_from_settings_applies_configuration() -> None:
    settings = _Settings(logging=_LoggingSettings(level="ERROR"))

    update_logging_from_settings(settings)

    root_logger = logging.getLogger()
    assert root_logger.level == logging.ERROR

    configure_logging(level="INFO", environment="testing")
