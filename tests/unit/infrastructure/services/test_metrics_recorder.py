from __future__ import annotations

import pytest

from siteops.infrastructure.services import metrics_recorder as module
from siteops.infrastructure.services.metrics_recorder import MetricsRecorder, with_metrics


@pytest.fixture(autouse=True)
def _silence_logger(monkeypatch, fake_logger):
    monkeypatch.setattr(module, "logger", fake_logger)


def test_record_request_updates_aggregates() -> None:
    recorder = MetricsRecorder()

    recorder.record_request("GET /health", 10)
    recorder.record_request("GET /health", 30, is_error=True)
    recorder.record_request("POST /api/errors", 20)

    metrics = recorder.get_metrics()
    assert metrics.request_count == 3
    assert metrics.average_response_time_ms == pytest.approx(20)
    assert metrics.error_rate == pytest.approx(1 / 3)
    assert metrics.endpoints["GET /health"].count == 2
    assert metrics.endpoints["GET /health"].errors == 1
    assert metrics.endpoints["GET /health"].total_time_ms == 40


def test_get_metrics_returns_a_snapshot() -> None:
    recorder = MetricsRecorder()
    recorder.record_request("GET /", 5)

    snapshot = recorder.get_metrics()
    snapshot.endpoints["GET /"].count = 99
    recorder.record_request("GET /", 5)

    assert recorder.get_metrics().endpoints["GET /"].count == 2
    assert snapshot.request_count == 1


def test_reset_clears_counters() -> None:
    recorder = MetricsRecorder()
    before = recorder.get_metrics().last_reset
    recorder.record_request("GET /", 5, is_error=True)

    recorder.reset()

    metrics = recorder.get_metrics()
    assert metrics.request_count == 0
    assert metrics.error_rate == 0
    assert metrics.endpoints == {}
    assert metrics.last_reset >= before


@pytest.mark.asyncio
async def test_with_metrics_records_success_and_failure() -> None:
    recorder = MetricsRecorder()

    @with_metrics(recorder, "GET /events")
    async def handler(fail: bool):
        if fail:
            raise RuntimeError("boom")
        return "ok"

    assert await handler(False) == "ok"
    with pytest.raises(RuntimeError):
        await handler(True)

    endpoint = recorder.get_metrics().endpoints["GET /events"]
    assert endpoint.count == 2
    assert endpoint.errors == 1
