"""
Core metrics: names, the StatsD client and the reporting helpers.

Everything here is a no-op unless ``METRICS_ENABLED`` is true. Values go to a
StatsD (DogStatsD tag syntax) server over UDP, so a missing server never
blocks or fails a request.
"""

import functools
import random
import socket
import statistics
import time
from typing import Any, Callable, Dict, List, Optional

from traitmatch.core.config import settings
from traitmatch.log.logging import logger

Tags = Optional[Dict[str, str]]


class MetricNames:
    """Metric names shared by dashboards and alerts."""

    API_REQUEST_DURATION = "api.request.duration"
    API_REQUEST_COUNT = "api.request.count"

    ALGORITHM_MATCHING_DURATION = "algorithm.matching.duration"
    ALGORITHM_MATCH_SCORE = "algorithm.match.score"
    ALGORITHM_MATCH_COUNT = "algorithm.match.count"
    ALGORITHM_JOBS_ANALYZED = "algorithm.jobs.analyzed"


class StatsDBackend:
    """Fire-and-forget StatsD client."""

    def __init__(self, host: str = "127.0.0.1", port: int = 8125, prefix: str = ""):
        self.address = (host, port)
        self.prefix = prefix
        self.socket = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)

    def _line(self, name: str, value: Any, kind: str, tags: Tags) -> str:
        full_name = f"{self.prefix}.{name}" if self.prefix else name
        line = f"{full_name}:{value}|{kind}"
        if tags:
            line += "|#" + ",".join(f"{key}:{val}" for key, val in tags.items())
        return line

    def _send(self, line: str) -> None:
        try:
            self.socket.sendto(line.encode("utf-8"), self.address)
        except OSError as e:
            logger.error("Failed to send metric to StatsD", error=str(e), address=self.address)

    def timing(self, name: str, seconds: float, tags: Tags = None) -> None:
        self._send(self._line(name, seconds * 1000, "ms", tags))

    def gauge(self, name: str, value: float, tags: Tags = None) -> None:
        self._send(self._line(name, value, "g", tags))

    def incr(self, name: str, value: int = 1, tags: Tags = None) -> None:
        self._send(self._line(name, value, "c", tags))


_metrics_backend: Optional[StatsDBackend] = None


def _get_statsd_client() -> Optional[StatsDBackend]:
    """Lazily build the process wide client; None while metrics are disabled."""
    global _metrics_backend

    if _metrics_backend is None and settings.metrics_enabled:
        _metrics_backend = StatsDBackend(
            host=settings.metrics_host,
            port=settings.metrics_port,
            prefix=settings.metrics_prefix,
        )
        logger.info(
            "StatsD metrics enabled",
            host=settings.metrics_host,
            port=settings.metrics_port,
            prefix=settings.metrics_prefix,
        )
    return _metrics_backend


def initialize_metrics() -> None:
    if settings.metrics_enabled:
        _get_statsd_client()
    else:
        logger.info("Metrics collection is disabled")


def _should_sample() -> bool:
    if not settings.metrics_enabled:
        return False
    rate = settings.metrics_sample_rate
    return rate >= 1.0 or random.random() < rate


def _client_if_sampled() -> Optional[StatsDBackend]:
    return _get_statsd_client() if _should_sample() else None


def report_timing(name: str, value: float, tags: Tags = None) -> None:
    """
    Report a duration.

    Args:
        name: Metric name, e.g. MetricNames.API_REQUEST_DURATION
        value: Duration in seconds
        tags: Optional tags
    """
    client = _client_if_sampled()
    if client:
        client.timing(name, value, tags=tags)


def report_gauge(name: str, value: float, tags: Tags = None) -> None:
    client = _client_if_sampled()
    if client:
        client.gauge(name, value, tags=tags)


def increment_counter(name: str, tags: Tags = None, value: int = 1) -> None:
    client = _client_if_sampled()
    if client:
        client.incr(name, value, tags)


def report_statistical_metrics(name: str, values: List[float], tags: Tags = None) -> None:
    """Report count, min, max, mean, median and stddev of ``values`` as ``name.<stat>`` gauges."""
    if not values or not settings.metrics_enabled:
        return

    summary = {
        "count": len(values),
        "min": min(values),
        "max": max(values),
        "mean": statistics.mean(values),
        "median": statistics.median(values),
        "stddev": statistics.stdev(values) if len(values) > 1 else 0.0,
    }
    for stat, value in summary.items():
        report_gauge(f"{name}.{stat}", value, tags)


def async_timer(metric_name: str, tags: Tags = None) -> Callable:
    """
    Time an async function, reporting even when it raises.

    Example:
        @async_timer("catalog.load.duration", {"component": "matching"})
        async def load():
            ...
    """
    def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> Any:
            if not settings.metrics_enabled:
                return await func(*args, **kwargs)

            start = time.perf_counter()
            try:
                return await func(*args, **kwargs)
            finally:
                report_timing(metric_name, time.perf_counter() - start, tags)

        return wrapper
    return decorator
