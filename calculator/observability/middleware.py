"""Request logging middleware."""

import time
import uuid
from typing import Callable

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from .logger import get_logger

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log every request on arrival and on completion.

    Binds a request id into structlog contextvars so that events logged by
    the endpoint carry it, and echoes the id in the response headers.
    """

    async def dispatch(self, request: Request, call_next: Callable):
        logger = get_logger("calculator.http")
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        method = request.method
        url = str(request.url.path)
        if request.url.query:
            url = f"{url}?{request.url.query}"

        logger.info(
            "request_started",
            method=method,
            url=url,
            ip=request.client.host if request.client else None,
            user_agent=request.headers.get("user-agent"),
        )

        start = time.perf_counter()
        status = 500
        try:
            response = await call_next(request)
            status = response.status_code
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            logger.info(
                "request_completed",
                method=method,
                url=url,
                status=status,
                duration_ms=elapsed_ms(start),
            )
            structlog.contextvars.unbind_contextvars("request_id")


def elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)
