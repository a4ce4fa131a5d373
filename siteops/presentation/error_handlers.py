"""Render failures as the ``{success: false, error: {...}}`` API body."""

from typing import Any, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from siteops.application.dtos.error_dto import create_api_error
from siteops.domain.entities.errors import ApplicationError, ErrorCode
from siteops.shared import EnumEnvironment, get_logger

logger = get_logger(__name__)


def hide_error_details(request: Request) -> bool:
    """Production and staging never expose stacks or error internals."""
    environment = getattr(request.app.state, "environment", None)
    return environment in (EnumEnvironment.PRODUCTION.value, EnumEnvironment.STAGING.value)


def _render(
    status_code: int, message: str, code: ErrorCode, details: Optional[Any]
) -> JSONResponse:
    body = create_api_error(message, code, details)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


async def application_error_handler(
    request: Request, exc: ApplicationError
) -> JSONResponse:
    logger.warning(
        "api.application_error",
        path=request.url.path,
        code=exc.code.value,
        status_code=exc.status_code,
        error=exc.message,
    )
    details = None if hide_error_details(request) else exc.to_dict()
    return _render(exc.status_code, exc.message, exc.code, details)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "api.unhandled_error", path=request.url.path, error=str(exc), exc_info=exc
    )
    details = None
    if not hide_error_details(request):
        details = {"name": type(exc).__name__, "message": str(exc)}
    return _render(500, "Internal server error", ErrorCode.INTERNAL_ERROR, details)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApplicationError, application_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
