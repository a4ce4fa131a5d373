from __future__ import annotations

from datetime import datetime, timezone

from siteops.domain.entities.errors import (
    ApplicationError,
    AuthenticationError,
    AuthorizationError,
    ErrorCode,
    ErrorContext,
)


def test_application_error_defaults() -> None:
    error = ApplicationError("boom")

    assert error.message == "boom"
    assert str(error) == "boom"
    assert error.code is ErrorCode.INTERNAL_ERROR
    assert error.status_code == 500
    assert error.is_retryable is False
    assert error.original_error is None
    assert error.context.component is None


def test_application_error_builds_context_from_mapping() -> None:
    error = ApplicationError(
        "bad input",
        ErrorCode.VALIDATION_ERROR,
        400,
        {"component": "signup", "action": "submit", "field": "email"},
    )

    assert error.context.component == "signup"
    assert error.context.action == "submit"
    assert error.context.metadata == {"field": "email"}


def test_application_error_chains_original_error() -> None:
    cause = ConnectionResetError("reset")
    error = ApplicationError("wrapped", original_error=cause)

    assert error.original_error is cause
    assert error.__cause__ is cause


def test_application_error_to_dict() -> None:
    context = ErrorContext(component="api", user_id="42")
    try:
        raise ApplicationError("nope", ErrorCode.AUTHORIZATION_ERROR, 403, context)
    except ApplicationError as exc:
        payload = exc.to_dict()

    assert payload["name"] == "ApplicationError"
    assert payload["code"] == "AUTHORIZATION_ERROR"
    assert payload["status_code"] == 403
    assert payload["context"]["component"] == "api"
    assert payload["context"]["user_id"] == "42"
    assert "nope" in payload["stack"]


def test_application_error_to_dict_without_traceback_has_no_stack() -> None:
    assert ApplicationError("never raised").to_dict()["stack"] is None


def test_access_error_subclasses() -> None:
    unauthenticated = AuthenticationError("missing token")
    forbidden = AuthorizationError("not an admin", {"component": "errors-api"})

    assert unauthenticated.status_code == 401
    assert unauthenticated.code is ErrorCode.AUTHENTICATION_ERROR
    assert forbidden.status_code == 403
    assert forbidden.code is ErrorCode.AUTHORIZATION_ERROR
    assert forbidden.is_retryable is False
    assert isinstance(forbidden, ApplicationError)


def test_context_parses_iso_timestamp_strings() -> None:
    context = ErrorContext.build(
        {"component": "feed", "timestamp": "2024-05-01T12:30:00.000Z"}
    )

    assert context.timestamp == datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
    assert context.to_dict()["timestamp"] == "2024-05-01T12:30:00+00:00"
    assert context.metadata == {}


def test_unparseable_timestamp_stays_in_metadata() -> None:
    error = ApplicationError("bad clock", context={"timestamp": "yesterday-ish"})

    payload = error.to_dict()

    assert isinstance(error.context.timestamp, datetime)
    assert payload["context"]["metadata"] == {"timestamp": "yesterday-ish"}


def test_non_string_timestamp_does_not_break_serialization() -> None:
    context = ErrorContext.build({"timestamp": 1714566600})

    assert context.metadata == {"timestamp": 1714566600}
    assert isinstance(context.to_dict()["timestamp"], str)
