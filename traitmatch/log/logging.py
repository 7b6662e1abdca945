"""
Logging setup for the trait matching service.

A single loguru logger is configured on import. Keyword arguments passed to a
log call are bound into the record's ``extra`` and printed after the message,
records from std-lib ``logging`` users (uvicorn, pymongo) are routed through
loguru, and WARNING and above are shipped to Datadog when ``DD_API_KEY`` is set.
"""

import inspect
import logging
import os
import sys
from typing import Dict, Union

import uvicorn
from datadog_api_client.v2 import ApiClient, Configuration
from datadog_api_client.v2.api.logs_api import LogsApi
from datadog_api_client.v2.model.content_encoding import ContentEncoding
from datadog_api_client.v2.model.http_log import HTTPLog
from datadog_api_client.v2.model.http_log_item import HTTPLogItem
from loguru import logger as _logger

from traitmatch.core.config import settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS Z}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<level>{message}</level> | <level>{extra}</level>"
)

DATADOG_LEVEL = os.getenv("LOGLEVEL_DATADOG", "WARNING")
_DATADOG_FIELDS = {"ddsource", "ddtags", "hostname", "message", "service", "status", "logger"}


class InterceptHandler(logging.Handler):
    """Hands std-lib log records to loguru, keeping the caller's location."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: Union[str, int] = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        frame, depth = inspect.currentframe(), 0
        while frame and (depth == 0 or frame.f_code.co_filename == logging.__file__):
            frame = frame.f_back
            depth += 1

        _logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


class DatadogSink:
    """Loguru sink submitting each record to the Datadog Logs intake."""

    def __init__(self, service: str, environment: str):
        self.service = service
        self.environment = environment
        self.hostname = os.getenv("HOSTNAME", "unknown")
        # DD_API_KEY and DD_SITE are read from the environment by the client
        self.api = LogsApi(ApiClient(Configuration()))

    def build_item(self, record: Dict) -> HTTPLogItem:
        level = record["level"].name
        attributes = {
            key: str(value)
            for key, value in record["extra"].items()
            if key not in _DATADOG_FIELDS
        }
        return HTTPLogItem(
            ddsource="loguru",
            ddtags=f"level:{level},env:{self.environment}",
            hostname=self.hostname,
            message=record["message"],
            service=self.service,
            status=level,
            logger=record["name"],
            **attributes,
        )

    def __call__(self, message) -> None:
        self.api.submit_log(
            content_encoding=ContentEncoding.DEFLATE,
            body=HTTPLog([self.build_item(message.record)]),
        )


def init_logging():
    """Configure loguru once and return it."""
    if getattr(init_logging, "_configured", False):
        return _logger

    _logger.remove()
    _logger.add(sys.stdout, format=CONSOLE_FORMAT, level=settings.log_level.upper())

    if os.getenv("DD_API_KEY"):
        _logger.add(
            DatadogSink(settings.service_name, settings.environment.lower()),
            level=DATADOG_LEVEL,
            catch=True,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    # Keep uvicorn from installing its own handlers over ours
    uvicorn.config.LOGGING_CONFIG = None

    init_logging._configured = True
    return _logger


logger = init_logging()
