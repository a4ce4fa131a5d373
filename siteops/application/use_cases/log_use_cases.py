"""Use cases for client error submission and log administration."""

from __future__ import annotations

from siteops.application.dtos.log_dto import (
    ClearLogsResultDTO,
    ClientErrorReportDTO,
    LogRecordDTO,
    RecentLogsDTO,
)
from siteops.domain.entities.log_record import ErrorSnapshot, LogRecord, RequestInfo
from siteops.infrastructure.logging.file_error_logger import FileErrorLogger
from siteops.infrastructure.logging.log_dispatcher import LogDispatcher
from siteops.shared import get_logger

logger = get_logger(__name__)


class SubmitClientErrorUseCase:
    """Persist an error reported by a browser or another process without file access."""

    def __init__(
        self, error_logger: FileErrorLogger, log_dispatcher: LogDispatcher
    ) -> None:
        self._error_logger = error_logger
        self._log_dispatcher = log_dispatcher

    async def execute(
        self, report: ClientErrorReportDTO, request: RequestInfo
    ) -> LogRecord:
        """
        Write the report to today's log file with request metadata merged in.

        The record is always persisted here, regardless of environment; the
        dispatcher only mirrors it to the console and the webhook.
        """
        request_info = RequestInfo(
            method=request.method,
            url=report.url or request.url,
            user_agent=request.user_agent,
            ip=request.ip,
        )
        context = {
            **(report.context or {}),
            "client_side": True,
            "request": {
                "method": request_info.method,
                "url": request_info.url,
                "user_agent": request_info.user_agent,
                "ip": request_info.ip,
            },
        }
        error = (
            ErrorSnapshot(
                name=report.error.name,
                message=report.error.message,
                stack=report.error.stack,
            )
            if report.error is not None
            else None
        )
        record = LogRecord(
            message=report.message,
            level=report.level,
            error=error,
            context=context,
            request=request_info,
        )

        await self._error_logger.log_to_file(record)
        await self._log_dispatcher.emit(record, to_sink=False)
        logger.debug("client_error.logged", record_id=record.id, level=record.level.value)
        return record


class GetRecentLogsUseCase:
    def __init__(self, error_logger: FileErrorLogger) -> None:
        self._error_logger = error_logger

    async def execute(
        self, limit: int = 50, include_stack: bool = True
    ) -> RecentLogsDTO:
        records = await self._error_logger.get_recent_logs(limit)
        return RecentLogsDTO(
            count=len(records),
            logs=[
                LogRecordDTO.from_domain(record, include_stack=include_stack)
                for record in records
            ],
        )


class ClearLogsUseCase:
    def __init__(self, error_logger: FileErrorLogger) -> None:
        self._error_logger = error_logger

    async def execute(self, older_than_days: int = 30) -> ClearLogsResultDTO:
        removed = await self._error_logger.clear_logs(older_than_days)
        return ClearLogsResultDTO(removed=sorted(removed))
