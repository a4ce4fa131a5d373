"""In-process request metrics."""

from __future__ import annotations

import copy
import functools
from datetime import datetime, timezone
from time import perf_counter
from typing import Any, Awaitable, Callable, TypeVar

from siteops.domain.entities.metrics import EndpointMetrics, PerformanceMetrics
from siteops.shared import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class MetricsRecorder:
    """
    Per-endpoint request counters with process-wide running aggregates.

    Every update is a single synchronous step, so concurrent requests on one
    event loop never observe a half-applied change.
    """

    def __init__(self) -> None:
        self._metrics = PerformanceMetrics()

    def record_request(
        self, endpoint: str, response_time_ms: float, is_error: bool = False
    ) -> None:
        metrics = self._metrics
        metrics.request_count += 1

        endpoint_metrics = metrics.endpoints.setdefault(endpoint, EndpointMetrics())
        endpoint_metrics.count += 1
        endpoint_metrics.total_time_ms += response_time_ms
        if is_error:
            endpoint_metrics.errors += 1

        endpoints = metrics.endpoints.values()
        metrics.average_response_time_ms = (
            sum(ep.total_time_ms for ep in endpoints) / metrics.request_count
        )
        metrics.error_rate = sum(ep.errors for ep in endpoints) / metrics.request_count

    def get_metrics(self) -> PerformanceMetrics:
        return copy.deepcopy(self._metrics)

    def reset(self) -> None:
        self._metrics = PerformanceMetrics(last_reset=datetime.now(timezone.utc))
        logger.info("metrics.reset")


def with_metrics(
    recorder: MetricsRecorder, endpoint: str
) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """Record latency and failure of an async handler without touching its outcome."""

    def decorator(handler: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(handler)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            start = perf_counter()
            is_error = False
            try:
                return await handler(*args, **kwargs)
            except BaseException:
                is_error = True
                raise
            finally:
                recorder.record_request(
                    endpoint, (perf_counter() - start) * 1000, is_error
                )

        return wrapper

    return decorator
