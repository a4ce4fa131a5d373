"""
Shared module - Cross-cutting concerns / Shared Layer

This module provides shared utilities, constants, and enums that are used
across multiple layers of the application.

Its primary responsibilities include:
- Defining cross-layer constants (environment names, log levels, log sinks)
- Naming the environment variables the deployment is expected to provide
- Configuring structured logging for every entry point

Shared module contains only cross-cutting concerns and must not depend
on Infrastructure or Frameworks.
"""

from .consts import (
    OPTIONAL_ENV_VARS,
    REQUIRED_ENV_VARS,
    EnumEnvironment,
    EnumLogLevel,
    EnumLogSink,
)
from .logging import configure_logging, get_logger, update_logging_from_settings

__all__ = [
    "EnumEnvironment",
    "EnumLogLevel",
    "EnumLogSink",
    "OPTIONAL_ENV_VARS",
    "REQUIRED_ENV_VARS",
    "configure_logging",
    "get_logger",
    "update_logging_from_settings",
]
