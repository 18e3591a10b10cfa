"""System module - service documentation and health checks."""

from .service import available_endpoints, build_documentation, health_snapshot
from .router import router


__all__ = [
    "available_endpoints",
    "build_documentation",
    "health_snapshot",
    "router",
]
