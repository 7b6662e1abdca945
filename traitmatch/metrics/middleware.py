"""
HTTP middleware for request metrics.
"""

import time
from typing import Iterable, Optional

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.types import ASGIApp

from traitmatch.core.config import settings
from traitmatch.log.logging import logger
from traitmatch.metrics.core import MetricNames, increment_counter, report_timing

DEFAULT_EXCLUDED_PATHS = ("/health", "/healthcheck", "/docs", "/openapi.json")


class MetricsMiddleware(BaseHTTPMiddleware):
    """Counts requests, times them and warns about slow ones."""

    def __init__(self, app: ASGIApp, exclude_paths: Optional[Iterable[str]] = None) -> None:
        super().__init__(app)
        self.exclude_paths = tuple(exclude_paths or DEFAULT_EXCLUDED_PATHS)

    def _excluded(self, path: str) -> bool:
        return path.startswith(self.exclude_paths)

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        if not settings.metrics_enabled or self._excluded(path):
            return await call_next(request)

        tags = {"method": request.method, "path": path}
        increment_counter(MetricNames.API_REQUEST_COUNT, dict(tags))

        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start

        status_code = response.status_code
        report_timing(
            MetricNames.API_REQUEST_DURATION,
            elapsed,
            {**tags, "status_code": str(status_code), "status_range": f"{status_code // 100}xx"},
        )

        elapsed_ms = elapsed * 1000.0
        if elapsed_ms > settings.slow_request_threshold_ms:
            logger.warning(
                "Slow request {method} {path} took {duration_ms:.0f}ms",
                method=request.method,
                path=path,
                duration_ms=elapsed_ms,
                status_code=status_code,
                request_id=request.headers.get("x-request-id", "unknown"),
            )
        return response


class TimingHeaderMiddleware(BaseHTTPMiddleware):
    """Adds ``X-Process-Time`` to every response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        response.headers["X-Process-Time"] = f"{(time.perf_counter() - start) * 1000:.2f}ms"
        return response


def setup_all_middleware(app: FastAPI) -> None:
    """Install the metrics middleware when metrics are enabled."""
    if not settings.metrics_enabled:
        logger.info("Metrics middleware not installed, metrics are disabled")
        return

    app.add_middleware(MetricsMiddleware)
    if settings.include_timing_header:
        app.add_middleware(TimingHeaderMiddleware)
    logger.info(
        "Metrics middleware installed",
        timing_header=settings.include_timing_header,
    )
