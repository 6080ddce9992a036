"""FastAPI application for the CivicAlert backend."""

import logging
import random
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from civicalert.config import Settings, get_settings
from civicalert.database import async_session_maker, check_db_ready, init_db
from civicalert.rate_limit import limiter
from civicalert.routers import auth_router, health_router, incidents_router, stats_router
from civicalert.services.auth import InvalidCredentialsError
from civicalert.services.incidents import (
    IncidentLockedError,
    IncidentNotFoundError,
    IncidentService,
)
from civicalert.services.mock_data import generate_mock_incidents
from civicalert.services.repository import IncidentRepository, InMemoryIncidentRepository
from civicalert.services.sql_repository import SqlIncidentRepository
from civicalert.websocket import websocket_router
from civicalert.websocket.manager import manager as ws_manager

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

settings = get_settings()


async def build_repository(settings: Settings) -> IncidentRepository:
    """Create the configured incident store."""
    if settings.incident_store == "database":
        await init_db()
        await check_db_ready()
        logger.info("Database ready")
        return SqlIncidentRepository(async_session_maker)
    return InMemoryIncidentRepository()


async def seed_incidents(repository: IncidentRepository, settings: Settings) -> int:
    """Fill an empty store with mock incidents. Returns the number added."""
    if settings.seed_mock_incidents <= 0 or await repository.count() > 0:
        return 0

    incidents = generate_mock_incidents(
        settings.seed_mock_incidents, rng=random.Random(settings.mock_seed)
    )
    # The feed lists newest insertions first; insert the lowest priority first
    # so the seeded feed starts out in priority order.
    for incident in reversed(incidents):
        await repository.add(incident)
    return len(incidents)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management."""
    logger.info("Starting CivicAlert backend...")

    try:
        repository = await build_repository(settings)
    except Exception as e:
        logger.error(f"Incident store not ready: {e}")
        raise

    seeded = await seed_incidents(repository, settings)
    if seeded:
        logger.info(f"Seeded {seeded} mock incidents")

    service = IncidentService(repository, listener=ws_manager.broadcast)
    app.state.incident_service = service
    logger.info(f"Incident store ready ({settings.incident_store})")

    yield

    await service.drain_notifications()
    logger.info("CivicAlert backend shut down")


# Create FastAPI app
app = FastAPI(
    title="CivicAlert API",
    description="Citizen incident reporting, live feed and triage API",
    version="0.1.0",
    lifespan=lifespan,
)

# Add rate limiter
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(IncidentNotFoundError)
async def incident_not_found_handler(request: Request, exc: IncidentNotFoundError):
    return JSONResponse(status_code=404, content={"detail": "Incident not found"})


@app.exception_handler(IncidentLockedError)
async def incident_locked_handler(request: Request, exc: IncidentLockedError):
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.exception_handler(InvalidCredentialsError)
async def invalid_credentials_handler(request: Request, exc: InvalidCredentialsError):
    return JSONResponse(
        status_code=401,
        content={"detail": "Invalid username or password"},
        headers={"WWW-Authenticate": "Bearer"},
    )


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Handle unhandled exceptions."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


# Include routers
app.include_router(health_router)
app.include_router(auth_router, prefix=settings.api_v1_prefix)
app.include_router(incidents_router, prefix=settings.api_v1_prefix)
app.include_router(stats_router, prefix=settings.api_v1_prefix)
app.include_router(websocket_router)  # WebSocket at /ws/incidents


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": "CivicAlert API",
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "civicalert.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
    )
