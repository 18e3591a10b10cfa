"""Observability module - structlog setup and request logging."""

from .logger import LogSinks, configure_logging, get_logger
from .middleware import RequestLoggingMiddleware, REQUEST_ID_HEADER


__all__ = [
    "LogSinks",
    "configure_logging",
    "get_logger",
    "RequestLoggingMiddleware",
    "REQUEST_ID_HEADER",
]
