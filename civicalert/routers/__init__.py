"""API routers."""

from civicalert.routers.auth import router as auth_router
from civicalert.routers.health import router as health_router
from civicalert.routers.incidents import router as incidents_router
from civicalert.routers.stats import router as stats_router

__all__ = ["auth_router", "health_router", "incidents_router", "stats_router"]
