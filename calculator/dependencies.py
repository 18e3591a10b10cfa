"""Global dependencies for the application."""

from fastapi import Request
from structlog.stdlib import BoundLogger

from calculator.observability import get_logger


async def get_event_logger(request: Request) -> BoundLogger:
    """Dependency to get the event logger for the current request.

    Handlers receive the logger through this dependency rather than reaching
    for a module-level instance, so tests can swap it out with
    ``app.dependency_overrides``.

    Args:
        request: The FastAPI request object.

    Returns:
        A structlog logger bound to the request path.
    """
    return get_logger("calculator.events").bind(path=request.url.path)
