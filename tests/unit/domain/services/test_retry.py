from __future__ import annotations

import errno

import pytest

from siteops.domain.entities.errors import ApplicationError, ErrorCode
from siteops.domain.entities.retry import GITHUB_RETRY_POLICY, RetryPolicy
from siteops.domain.services import retry as retry_module
from siteops.domain.services.retry import (
    compute_backoff_delay,
    error_code_of,
    error_status_of,
    is_error_retryable,
    with_retry,
)


class _StatusError(Exception):
    def __init__(self, message: str, status: int):
        super().__init__(message)
        self.status = status


class _Response:
    def __init__(self, status_code: int):
        self.status_code = status_code


class _ResponseError(Exception):
    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.response = _Response(status_code)


class _Flaky:
    """Fails ``failures`` times with ``error`` and then returns ``result``."""

    def __init__(self, failures: int, error: Exception, result: str = "ok"):
        self.failures = failures
        self.error = error
        self.result = result
        self.calls = 0

    async def __call__(self) -> str:
        self.calls += 1
        if self.calls <= self.failures:
            raise self.error
        return self.result


class _Sleeps:
    def __init__(self) -> None:
        self.delays = []

    async def __call__(self, delay_ms: float) -> None:
        self.delays.append(delay_ms)


@pytest.fixture()
def sleeps() -> _Sleeps:
    return _Sleeps()


@pytest.fixture(autouse=True)
def _silence_logger(monkeypatch, fake_logger):
    monkeypatch.setattr(retry_module, "logger", fake_logger)
    return fake_logger


def test_error_code_of_reads_code_attribute_and_errno() -> None:
    app_error = ApplicationError("x", ErrorCode.NETWORK_ERROR)
    os_error = ConnectionResetError(errno.ECONNRESET, "reset")

    assert error_code_of(app_error) == "NETWORK_ERROR"
    assert error_code_of(os_error) == "ECONNRESET"
    assert error_code_of(ValueError("x")) is None


def test_error_status_of() -> None:
    assert error_status_of(_StatusError("x", 503)) == 503
    assert error_status_of(_ResponseError("x", 502)) == 502
    assert error_status_of(ValueError("x")) is None


def test_default_heuristic() -> None:
    assert is_error_retryable(Exception("request timeout"))
    assert is_error_retryable(Exception("network unreachable"))
    assert is_error_retryable(ConnectionResetError(errno.ECONNRESET, "reset"))
    assert is_error_retryable(_StatusError("server", 500))
    assert not is_error_retryable(_StatusError("client", 404))
    assert not is_error_retryable(ValueError("bad input"))


def test_default_heuristic_is_case_sensitive() -> None:
    assert not is_error_retryable(Exception("Request TIMEOUT"))


def test_explicit_patterns_match_message_case_insensitively_or_code_exactly() -> None:
    patterns = ("rate limit", "ECONNRESET")

    assert is_error_retryable(Exception("API Rate Limit exceeded"), patterns)
    assert is_error_retryable(ConnectionResetError(errno.ECONNRESET, "peer"), patterns)
    assert not is_error_retryable(_StatusError("server", 500), patterns)


def test_compute_backoff_delay_is_capped() -> None:
    delays = [compute_backoff_delay(GITHUB_RETRY_POLICY, n) for n in range(1, 6)]

    assert delays == [1000, 2000, 4000, 8000, 10000]


@pytest.mark.asyncio
async def test_with_retry_returns_first_success_without_sleeping(sleeps) -> None:
    operation = _Flaky(0, Exception("timeout"))

    result = await with_retry(operation, GITHUB_RETRY_POLICY, sleep=sleeps)

    assert result == "ok"
    assert operation.calls == 1
    assert sleeps.delays == []


@pytest.mark.asyncio
async def test_with_retry_recovers_after_transient_failures(sleeps, fake_logger) -> None:
    operation = _Flaky(2, Exception("ETIMEDOUT while reading"))

    result = await with_retry(
        operation, GITHUB_RETRY_POLICY, {"component": "github"}, sleep=sleeps
    )

    assert result == "ok"
    assert operation.calls == 3
    assert sleeps.delays == [1000, 2000]
    assert fake_logger.names("warning") == ["retry.scheduled", "retry.scheduled"]
    assert fake_logger.names("info") == ["retry.succeeded"]


@pytest.mark.asyncio
async def test_with_retry_gives_up_after_max_attempts(sleeps, reporter) -> None:
    error = Exception("network down")
    operation = _Flaky(10, error)
    policy = RetryPolicy(4, 1000, 10000, retryable_errors=("network",))

    with pytest.raises(Exception) as exc_info:
        await with_retry(
            operation, policy, {"component": "email"}, reporter=reporter, sleep=sleeps
        )

    assert exc_info.value is error
    assert operation.calls == 4
    assert sleeps.delays == [1000, 2000, 4000]
    assert len(reporter.calls) == 1
    call = reporter.calls[0]
    assert call["message"] == "Operation failed after all retries"
    assert call["error"] is error
    assert call["context"] == {
        "component": "email",
        "attempt": 4,
        "total_attempts": 4,
        "is_retryable": True,
    }


@pytest.mark.asyncio
async def test_with_retry_does_not_retry_permanent_failures(sleeps, reporter) -> None:
    operation = _Flaky(10, ValueError("invalid payload"))

    with pytest.raises(ValueError):
        await with_retry(operation, GITHUB_RETRY_POLICY, reporter=reporter, sleep=sleeps)

    assert operation.calls == 1
    assert sleeps.delays == []
    assert reporter.calls[0]["context"]["is_retryable"] is False


@pytest.mark.asyncio
async def test_with_retry_single_attempt_policy(sleeps) -> None:
    operation = _Flaky(1, Exception("timeout"))

    with pytest.raises(Exception):
        await with_retry(operation, RetryPolicy(1, 100, 100), sleep=sleeps)

    assert operation.calls == 1
