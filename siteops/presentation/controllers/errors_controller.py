"""Error log endpoints: client submission and admin retrieval."""

from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends, Query, Request, status
from fastapi.responses import JSONResponse

from siteops.application.dtos.log_dto import (
    ClearLogsResultDTO,
    ClientErrorReportDTO,
    LogSubmissionAckDTO,
    RecentLogsDTO,
)
from siteops.application.use_cases.log_use_cases import (
    ClearLogsUseCase,
    GetRecentLogsUseCase,
    SubmitClientErrorUseCase,
)
from siteops.domain.entities.log_record import RequestInfo
from siteops.presentation.error_handlers import hide_error_details
from siteops.presentation.security import require_admin
from siteops.shared import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/api/errors", tags=["Errors"])


def client_ip(request: Request) -> str:
    """First forwarded address, then ``x-real-ip``, then the peer."""
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        first = forwarded_for.split(",")[0].strip()
        if first:
            return first
    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    if request.client is not None and request.client.host:
        return request.client.host
    return "unknown"


def request_info(request: Request) -> RequestInfo:
    return RequestInfo(
        method=request.method,
        url=str(request.url),
        user_agent=request.headers.get("user-agent"),
        ip=client_ip(request),
    )


@router.post(
    "",
    response_model=LogSubmissionAckDTO,
    response_model_exclude_none=True,
    responses={500: {"model": LogSubmissionAckDTO}},
)
@inject
async def submit_error(
    report: ClientErrorReportDTO,
    request: Request,
    submit_client_error_use_case: SubmitClientErrorUseCase = Depends(
        Provide["submit_client_error_use_case"]
    ),
):
    """Persist an error reported by the browser."""
    try:
        record = await submit_client_error_use_case.execute(report, request_info(request))
    except Exception as exc:
        logger.error("client_error.submit_failed", error=str(exc), exc_info=exc)
        body = LogSubmissionAckDTO(success=False, error="Failed to log error")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=body.model_dump(exclude_none=True),
        )

    logger.info("client_error.received", record_id=record.id)
    return LogSubmissionAckDTO(success=True)


@router.get(
    "", response_model=RecentLogsDTO, dependencies=[Depends(require_admin)]
)
@inject
async def recent_errors(
    request: Request,
    limit: int = Query(default=50, ge=1, le=1000),
    get_recent_logs_use_case: GetRecentLogsUseCase = Depends(
        Provide["get_recent_logs_use_case"]
    ),
) -> RecentLogsDTO:
    """Newest error records first, for the admin dashboard.

    Stacks are dropped in production and staging.
    """
    return await get_recent_logs_use_case.execute(
        limit, include_stack=not hide_error_details(request)
    )


@router.delete(
    "", response_model=ClearLogsResultDTO, dependencies=[Depends(require_admin)]
)
@inject
async def clear_errors(
    older_than_days: int = Query(default=30, ge=0),
    clear_logs_use_case: ClearLogsUseCase = Depends(Provide["clear_logs_use_case"]),
) -> ClearLogsResultDTO:
    """Delete log files untouched for ``older_than_days`` days."""
    return await clear_logs_use_case.execute(older_than_days)
