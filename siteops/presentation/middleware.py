"""Request timing middleware feeding the metrics recorder."""

from time import perf_counter
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from siteops.infrastructure.services.metrics_recorder import MetricsRecorder


UNMATCHED_ROUTE = "<unmatched>"


def endpoint_key(request: Request) -> str:
    """``METHOD /route/template``; requests no route matched share one key."""
    route = request.scope.get("route")
    path = getattr(route, "path", None) or UNMATCHED_ROUTE
    return f"{request.method} {path}"


class RequestMetricsMiddleware(BaseHTTPMiddleware):
    """Record duration and error outcome of every request.

    Responses with a 5xx status and exceptions escaping the app both count
    as errors.
    """

    def __init__(self, app: ASGIApp, recorder: Callable[[], MetricsRecorder]) -> None:
        super().__init__(app)
        self._recorder = recorder

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start = perf_counter()
        is_error = True
        try:
            response = await call_next(request)
            is_error = response.status_code >= 500
            return response
        finally:
            elapsed_ms = (perf_counter() - start) * 1000
            self._recorder().record_request(endpoint_key(request), elapsed_ms, is_error)
