from __future__ import annotations

import pytest
from pydantic import ValidationError

from siteops.application.dtos.error_dto import create_api_error
from siteops.application.dtos.log_dto import ClientErrorReportDTO, LogRecordDTO
from siteops.domain.entities.errors import ErrorCode
from siteops.domain.entities.log_record import ErrorSnapshot, LogLevel, LogRecord


def test_client_error_report_defaults() -> None:
    report = ClientErrorReportDTO(message="boom")

    assert report.level is LogLevel.ERROR
    assert report.error is None
    assert report.context is None


@pytest.mark.parametrize(
    "payload",
    [{}, {"message": ""}, {"message": "x", "level": "fatal"}],
)
def test_client_error_report_validation(payload) -> None:
    with pytest.raises(ValidationError):
        ClientErrorReportDTO(**payload)


def test_log_record_dto_from_domain() -> None:
    record = LogRecord(
        message="oops",
        error=ErrorSnapshot(name="Error", message="oops"),
        context={"a": 1},
    )

    dto = LogRecordDTO.from_domain(record)

    assert dto.id == record.id
    assert dto.error.name == "Error"
    assert dto.context == {"a": 1}
    assert dto.request is None


def test_create_api_error_body() -> None:
    body = create_api_error("Not allowed", ErrorCode.AUTHORIZATION_ERROR, {"role": "guest"})

    payload = body.model_dump(mode="json")
    assert payload["success"] is False
    assert payload["error"]["code"] == "AUTHORIZATION_ERROR"
    assert payload["error"]["message"] == "Not allowed"
    assert payload["error"]["details"] == {"role": "guest"}
    assert payload["error"]["timestamp"]


@pytest.mark.parametrize("level", ["error", "warn", "info"])
def test_client_error_report_accepts_persisted_levels(level) -> None:
    assert ClientErrorReportDTO(message="x", level=level).level is LogLevel(level)


def test_client_error_report_rejects_debug_level() -> None:
    with pytest.raises(ValidationError) as exc_info:
        ClientErrorReportDTO(message="x", level="debug")

    assert "error, warn, info" in str(exc_info.value)


def test_log_record_dto_can_drop_stack() -> None:
    record = LogRecord(
        message="oops",
        error=ErrorSnapshot(name="TypeError", message="bad", stack="at internal.py:42"),
    )

    hidden = LogRecordDTO.from_domain(record, include_stack=False)
    shown = LogRecordDTO.from_domain(record)

    assert hidden.error.name == "TypeError"
    assert hidden.error.message == "bad"
    assert hidden.error.stack is None
    assert shown.error.stack == "at internal.py:42"
    assert record.error.stack == "at internal.py:42"
