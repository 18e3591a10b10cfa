"""Service documentation and health reporting."""

import gc
import sys
import time
from typing import Any

from calculator.arithmetic.operations import OPERATIONS
from calculator.arithmetic.schemas import format_timestamp, utcnow
from calculator.config import Settings

PROCESS_STARTED_AT = time.monotonic()

HEALTH_PATH = "/health"


def available_endpoints() -> list[str]:
    return [operation.path for operation in OPERATIONS.values()] + [HEALTH_PATH]


def build_documentation(settings: Settings, base_url: str) -> dict[str, Any]:
    """Describe every endpoint with example URLs rooted at ``base_url``.

    Args:
        settings: Application settings.
        base_url: Scheme and host the client used, without trailing slash.

    Returns:
        Documentation payload.
    """
    endpoints: dict[str, Any] = {}
    for operation in OPERATIONS.values():
        parameters = {
            name: f"number ({operation.notes[name]})" if name in operation.notes else "number"
            for name in operation.parameters
        }
        entry: dict[str, Any] = {
            "method": "GET",
            "path": operation.path,
            "parameters": parameters,
            "example": f"{base_url}{operation.path}?{operation.example_query()}",
        }
        if operation.aliases:
            entry["aliases"] = dict(zip(operation.parameters, operation.aliases))
        endpoints[operation.name] = entry

    return {
        "message": f"{settings.APP_NAME} API",
        "version": settings.APP_VERSION,
        "endpoints": endpoints,
        "healthCheck": f"{base_url}{HEALTH_PATH}",
        "note": "All operation endpoints take their operands as query parameters",
    }


def memory_usage() -> dict[str, Any]:
    """Report process memory statistics.

    ``peakRss`` is in bytes and is only available where the ``resource``
    module exists (POSIX).
    """
    stats: dict[str, Any] = {
        "allocatedBlocks": sys.getallocatedblocks(),
        "gcCounts": list(gc.get_count()),
    }
    try:
        import resource
    except ImportError:
        return stats

    max_rss = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    # ru_maxrss is kilobytes on Linux, bytes on macOS
    stats["peakRss"] = max_rss if sys.platform == "darwin" else max_rss * 1024
    return stats


def health_snapshot() -> dict[str, Any]:
    return {
        "status": "healthy",
        "timestamp": format_timestamp(utcnow()),
        "uptime": round(time.monotonic() - PROCESS_STARTED_AT, 3),
        "memoryUsage": memory_usage(),
        "dbConnection": "none",
    }
