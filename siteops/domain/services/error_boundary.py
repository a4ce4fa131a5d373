"""Handler boundaries that normalize foreign errors into ApplicationError."""

from __future__ import annotations

import functools
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar

from siteops.domain.entities.errors import ApplicationError, ErrorCode
from siteops.domain.ports.error_reporter import IErrorReporter
from siteops.shared import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


def normalize_error(
    error: BaseException, context: Optional[Dict[str, Any]] = None
) -> ApplicationError:
    """Return ``error`` itself when classified, else wrap it (status 500)."""
    if isinstance(error, ApplicationError):
        return error
    return ApplicationError(
        str(error) or "Unknown error occurred",
        ErrorCode.VALIDATION_ERROR,
        500,
        context,
        is_retryable=False,
        original_error=error,
    )


async def _report(
    reporter: Optional[IErrorReporter],
    message: str,
    error: ApplicationError,
    context: Optional[Dict[str, Any]],
) -> None:
    logger.error(message, code=error.code.value, error=error.message)
    if reporter is not None:
        await reporter.dispatch(message, error, context)


async def handle_async_error(
    operation: Callable[[], Awaitable[T]],
    context: Optional[Dict[str, Any]] = None,
    reporter: Optional[IErrorReporter] = None,
) -> T:
    """Await ``operation``; any failure is logged and re-raised classified."""
    try:
        return await operation()
    except Exception as exc:
        app_error = normalize_error(exc, context)
        await _report(reporter, "Async operation failed", app_error, context)
        if app_error is exc:
            raise
        raise app_error from exc


def with_error_handling(
    handler: Optional[Callable[..., Awaitable[T]]] = None,
    *,
    reporter: Optional[IErrorReporter] = None,
) -> Any:
    """
    Decorate an async handler so only ApplicationError escapes it.

    Classified errors pass through untouched. Anything else is wrapped with
    ``component="api-handler"``, reported and raised in its place.
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return await func(*args, **kwargs)
            except ApplicationError:
                raise
            except Exception as exc:
                context = {"component": "api-handler"}
                app_error = normalize_error(exc, context)
                await _report(reporter, "API handler error", app_error, context)
                raise app_error from exc

        return wrapper

    if handler is not None:
        return decorator(handler)
    return decorator
