"""
Retry with exponential backoff.

Operations are re-attempted sequentially, never in parallel with
themselves. Whether a failure is worth another attempt is decided by
:func:`is_error_retryable`; how long to wait by :func:`compute_backoff_delay`.
"""

from __future__ import annotations

import asyncio
import errno
from typing import Any, Awaitable, Callable, Dict, Optional, Sequence, TypeVar

from siteops.domain.entities.retry import RetryPolicy
from siteops.domain.ports.error_reporter import IErrorReporter
from siteops.shared import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[Any]]

_DEFAULT_MESSAGE_MARKERS = ("timeout", "network", "ECONNRESET", "ENOTFOUND")
_DEFAULT_CODES = ("ECONNRESET", "ETIMEDOUT")


def error_code_of(error: BaseException) -> Optional[str]:
    """Symbolic code of an error: ``code`` attribute, else the errno name."""
    code = getattr(error, "code", None)
    if code is not None:
        return code.value if hasattr(code, "value") else str(code)
    if isinstance(error, OSError) and error.errno is not None:
        return errno.errorcode.get(error.errno)
    return None


def error_status_of(error: BaseException) -> Optional[int]:
    """HTTP-like status attached to an error, if any."""
    status = getattr(error, "status", None)
    if isinstance(status, int):
        return status
    response = getattr(error, "response", None)
    status_code = getattr(response, "status_code", None)
    return status_code if isinstance(status_code, int) else None


def is_error_retryable(
    error: BaseException, retryable_errors: Optional[Sequence[str]] = None
) -> bool:
    """
    Decide whether a failure is transient.

    With explicit patterns the message match is case-insensitive and the code
    must equal a pattern exactly. Without patterns the default markers are
    matched case-sensitively, plus connection codes and 5xx statuses.
    """
    message = str(error)
    code = error_code_of(error)

    if retryable_errors is None:
        status = error_status_of(error)
        return (
            any(marker in message for marker in _DEFAULT_MESSAGE_MARKERS)
            or code in _DEFAULT_CODES
            or (status is not None and status >= 500)
        )

    lowered = message.lower()
    return any(
        pattern.lower() in lowered or code == pattern for pattern in retryable_errors
    )


def compute_backoff_delay(policy: RetryPolicy, attempt: int) -> float:
    """Delay in milliseconds after the ``attempt``-th failure (1-indexed)."""
    return min(
        policy.base_delay_ms * policy.backoff_multiplier ** (attempt - 1),
        policy.max_delay_ms,
    )


async def _sleep_ms(delay_ms: float) -> None:
    await asyncio.sleep(delay_ms / 1000)


async def with_retry(
    operation: Callable[[], Awaitable[T]],
    policy: RetryPolicy,
    context: Optional[Dict[str, Any]] = None,
    *,
    reporter: Optional[IErrorReporter] = None,
    sleep: Sleep = _sleep_ms,
) -> T:
    """
    Run ``operation`` up to ``policy.max_attempts`` times.

    Args:
        operation: Zero-argument coroutine factory; called once per attempt.
        policy: Attempts, delays and retryable patterns.
        context: Extra fields attached to every log event.
        reporter: Receives the terminal failure (log dispatch facade).
        sleep: Awaitable taking a delay in milliseconds.

    Returns:
        The first successful result.

    Raises:
        The last failure, once it is not retryable or attempts are exhausted.
    """
    context = dict(context or {})
    attempt = 0

    while True:
        try:
            result = await operation()
        except Exception as exc:
            attempt += 1
            retryable = is_error_retryable(exc, policy.retryable_errors)

            if not retryable or attempt >= policy.max_attempts:
                logger.error(
                    "retry.exhausted",
                    attempt=attempt,
                    total_attempts=policy.max_attempts,
                    is_retryable=retryable,
                    error=str(exc),
                    context=context,
                )
                if reporter is not None:
                    await reporter.dispatch(
                        "Operation failed after all retries",
                        exc,
                        {
                            **context,
                            "attempt": attempt,
                            "total_attempts": policy.max_attempts,
                            "is_retryable": retryable,
                        },
                    )
                raise

            delay = compute_backoff_delay(policy, attempt)
            logger.warning(
                "retry.scheduled",
                attempt=attempt,
                total_attempts=policy.max_attempts,
                delay_ms=delay,
                error=str(exc),
                context=context,
            )
            await sleep(delay)
            continue

        if attempt > 0:
            logger.info(
                "retry.succeeded",
                attempt=attempt + 1,
                total_attempts=policy.max_attempts,
                context=context,
            )
        return result
