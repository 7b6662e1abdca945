"""
Tests for the metrics system.

This module contains unit tests for the metrics collection and reporting.
"""

from unittest.mock import MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from traitmatch.core.config import settings
from traitmatch.metrics import MetricNames, report_match_score_distribution, setup_all_middleware
from traitmatch.metrics.algorithm import score_buckets
from traitmatch.metrics.core import StatsDBackend, async_timer, report_timing


@pytest.fixture
def statsd(monkeypatch):
    """Enable metrics and capture what would be sent to StatsD."""
    monkeypatch.setattr(settings, "metrics_enabled", True)
    monkeypatch.setattr(settings, "metrics_sample_rate", 1.0)
    client = MagicMock()
    monkeypatch.setattr("traitmatch.metrics.core._get_statsd_client", lambda: client)
    return client


def test_statsd_wire_format():
    backend = StatsDBackend(prefix="traitmatch")
    backend.socket = MagicMock()

    backend.timing("algorithm.matching.duration", 0.25, {"algorithm": "trait_distance"})
    backend.gauge("algorithm.match.count", 3)
    backend.incr("api.request.count")

    sent = [c.args[0] for c in backend.socket.sendto.call_args_list]
    assert sent == [
        b"traitmatch.algorithm.matching.duration:250.0|ms|#algorithm:trait_distance",
        b"traitmatch.algorithm.match.count:3|g",
        b"traitmatch.api.request.count:1|c",
    ]


def test_statsd_send_failure_is_logged_not_raised():
    backend = StatsDBackend()
    backend.socket = MagicMock()
    backend.socket.sendto.side_effect = OSError("network unreachable")

    backend.gauge("x", 1)


def test_disabled_metrics_send_nothing(monkeypatch):
    monkeypatch.setattr(settings, "metrics_enabled", False)
    client = MagicMock()
    monkeypatch.setattr("traitmatch.metrics.core._get_statsd_client", lambda: client)

    report_timing("x", 1.0)

    client.timing.assert_not_called()


def test_sample_rate_zero_drops_metrics(statsd, monkeypatch):
    monkeypatch.setattr(settings, "metrics_sample_rate", 0.0)

    report_timing("x", 1.0)

    statsd.timing.assert_not_called()


@pytest.mark.asyncio
async def test_async_timer_reports_duration(statsd):
    @async_timer("test.duration", {"component": "tests"})
    async def work():
        return 42

    assert await work() == 42
    name, value = statsd.timing.call_args.args
    assert name == "test.duration"
    assert value >= 0
    assert statsd.timing.call_args.kwargs == {"tags": {"component": "tests"}}


def test_score_buckets():
    buckets = score_buckets([0.05, 0.55, 0.95, 1.0])

    assert len(buckets) == 10
    assert buckets["0.0-0.1"] == 1
    assert buckets["0.5-0.6"] == 1
    assert buckets["0.9-1.0"] == 2
    assert sum(buckets.values()) == 4


def test_score_distribution_reports_summary_gauges(statsd):
    report_match_score_distribution([1.0, 0.5], {"algorithm": "trait_distance"})

    names = {c.args[0] for c in statsd.gauge.call_args_list}
    assert f"{MetricNames.ALGORITHM_MATCH_SCORE}.max" in names
    assert f"{MetricNames.ALGORITHM_MATCH_SCORE}.mean" in names
    assert f"{MetricNames.ALGORITHM_MATCH_SCORE}.bucket" in names


def test_middleware_records_requests_and_timing_header(statsd, monkeypatch):
    monkeypatch.setattr(settings, "include_timing_header", True)
    app = FastAPI()
    setup_all_middleware(app)

    @app.get("/ping")
    async def ping():
        return {"ok": True}

    @app.get("/health")
    async def health():
        return {"status": "UP"}

    client = TestClient(app)
    response = client.get("/ping")

    assert response.headers["X-Process-Time"].endswith("ms")
    statsd.incr.assert_called_once()
    assert statsd.incr.call_args.args[0] == MetricNames.API_REQUEST_COUNT
    tags = statsd.timing.call_args.kwargs["tags"]
    assert tags["status_code"] == "200"
    assert tags["status_range"] == "2xx"

    client.get("/health")
    statsd.incr.assert_called_once()
