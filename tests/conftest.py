from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from siteops.domain.entities.health import ConnectionResult  # noqa: E402
from siteops.domain.entities.log_record import LogLevel, LogRecord  # noqa: E402


class FakeLogger:
    """Stands in for a module level structlog logger."""

    def __init__(self) -> None:
        self.events: List[tuple[str, str, Dict[str, Any]]] = []

    def _record(self, level: str, event: str, **kwargs: Any) -> None:
        self.events.append((level, event, kwargs))

    def debug(self, event: str, **kwargs: Any) -> None:
        self._record("debug", event, **kwargs)

    def info(self, event: str, **kwargs: Any) -> None:
        self._record("info", event, **kwargs)

    def warning(self, event: str, **kwargs: Any) -> None:
        self._record("warning", event, **kwargs)

    def error(self, event: str, **kwargs: Any) -> None:
        self._record("error", event, **kwargs)

    def names(self, level: Optional[str] = None) -> List[str]:
        return [name for lvl, name, _ in self.events if level is None or lvl == level]


class FakeReporter:
    """Collects what would be sent to the log dispatcher."""

    def __init__(self) -> None:
        self.calls: List[Dict[str, Any]] = []

    async def dispatch(self, message, error=None, context=None, level=LogLevel.ERROR):
        self.calls.append(
            {"message": message, "error": error, "context": context, "level": level}
        )


class FakeSink:
    def __init__(self) -> None:
        self.records: List[LogRecord] = []

    async def write(self, record: LogRecord) -> None:
        self.records.append(record)


class StubGateway:
    def __init__(self, result: ConnectionResult, description=None) -> None:
        self._result = result
        self._description = description or {}
        self.calls = 0

    def describe(self) -> Dict[str, Any]:
        return dict(self._description)

    async def test_connection(self) -> ConnectionResult:
        self.calls += 1
        return self._result


@pytest.fixture()
def fake_logger() -> FakeLogger:
    return FakeLogger()


@pytest.fixture()
def reporter() -> FakeReporter:
    return FakeReporter()


@pytest.fixture()
def sink() -> FakeSink:
    return FakeSink()


@pytest.fixture()
def fixed_now() -> datetime:
    return datetime(2024, 5, 1, 12, 30, 0, tzinfo=timezone.utc)


@pytest.fixture()
def required_env(monkeypatch) -> Dict[str, str]:
    values = {
        "NEXTAUTH_SECRET": "secret",
        "GOOGLE_CLIENT_ID": "client-id",
        "GOOGLE_CLIENT_SECRET": "client-secret",
        "GITMESH_CE_ADMIN_EMAILS": "admin@example.org",
    }
    for key, value in values.items():
        monkeypatch.setenv(key, value)
    return values


@pytest.fixture()
def make_gateway():
    def _make(
        success: bool = True,
        error: Optional[str] = None,
        *,
        configured: bool = True,
        **description: Any,
    ):
        result = ConnectionResult(success=success, error=error, configured=configured)
        return StubGateway(result, description)

    return _make


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch, tmp_path):
    """Keep settings-driven code away from the real log directory and network."""
    monkeypatch.setenv("ENVIRONMENT", "testing")
    monkeypatch.setenv("LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.setenv("MONITORING_HEALTH_CHECK_INTERVAL_SECONDS", "0")
    monkeypatch.delenv("ERROR_WEBHOOK_URL", raising=False)
    monkeypatch.delenv("LOG_SINK", raising=False)
    monkeypatch.delenv("ADMIN_API_TOKEN", raising=False)
