"""FastAPI router for documentation and health endpoints."""

from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request
from structlog.stdlib import BoundLogger

from calculator.config import Settings, get_settings
from calculator.dependencies import get_event_logger

from .service import build_documentation, health_snapshot, HEALTH_PATH


router = APIRouter(tags=["system"])


@router.get("/")
async def documentation(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings)],
    logger: Annotated[BoundLogger, Depends(get_event_logger)],
) -> dict[str, Any]:
    """Return JSON documentation of the available endpoints."""
    base_url = str(request.base_url).rstrip("/")
    payload = build_documentation(settings, base_url)
    logger.info("documentation_accessed")
    return payload


@router.get(HEALTH_PATH)
async def health_check(
    logger: Annotated[BoundLogger, Depends(get_event_logger)],
) -> dict[str, Any]:
    """Return service health for liveness checks."""
    payload = health_snapshot()
    logger.info(
        "health_check_performed",
        uptime=payload["uptime"],
        memory_usage=payload["memoryUsage"],
    )
    return payload
