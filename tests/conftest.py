"""Pytest fixtures for CivicAlert backend tests."""

from collections.abc import AsyncGenerator
from datetime import UTC, datetime

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from civicalert.database import Base
from civicalert.main import app
from civicalert.models import IncidentRecord  # noqa: F401  (registers the table)
from civicalert.rate_limit import limiter
from civicalert.schemas.incident import Incident, IncidentStatus, IncidentType, SeverityLevel
from civicalert.services.auth import STAFF_ACCOUNTS, create_access_token
from civicalert.services.incidents import IncidentService, get_incident_service
from civicalert.services.repository import InMemoryIncidentRepository
from civicalert.services.scoring import calculate_priority_score
from civicalert.services.sql_repository import SqlIncidentRepository

# SQLite keeps the in-memory database alive only on a single shared connection.
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

FIXED_NOW = datetime(2026, 10, 18, 10, 0, 0, tzinfo=UTC)


def make_incident(
    sequence: int,
    incident_type: IncidentType = IncidentType.ACCIDENT,
    severity: SeverityLevel = SeverityLevel.MEDIUM,
    status: IncidentStatus = IncidentStatus.UNVERIFIED,
    confirmations: int = 1,
    created_at: datetime = FIXED_NOW,
    description: str = "Vehicle collision at intersection",
) -> Incident:
    """Build a stored-shape incident with a consistent priority score."""
    return Incident(
        id=f"INC-{sequence:06d}",
        type=incident_type,
        description=description,
        latitude=37.7749,
        longitude=-122.4194,
        status=status,
        severity=severity,
        confirmations=confirmations,
        priority_score=calculate_priority_score(incident_type, severity, confirmations),
        created_at=created_at,
        updated_at=created_at,
    )


@pytest.fixture
def fixed_now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def repository() -> InMemoryIncidentRepository:
    return InMemoryIncidentRepository()


@pytest.fixture
def service(repository) -> IncidentService:
    """Incident service on an empty in-memory store with a frozen clock."""
    return IncidentService(repository, clock=lambda: FIXED_NOW)


@pytest_asyncio.fixture
async def client(service: IncidentService) -> AsyncGenerator[AsyncClient, None]:
    """Create test HTTP client with the incident service overridden."""
    app.dependency_overrides[get_incident_service] = lambda: service
    limiter.reset()

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers() -> dict[str, str]:
    token = create_access_token(STAFF_ACCOUNTS["admin"][1])
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def responder_headers() -> dict[str, str]:
    token = create_access_token(STAFF_ACCOUNTS["responder"][1])
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def sql_engine() -> AsyncGenerator[AsyncEngine, None]:
    """In-memory SQLite engine with the incidents table created."""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def sql_repository(sql_engine) -> SqlIncidentRepository:
    return SqlIncidentRepository(async_sessionmaker(sql_engine, expire_on_commit=False))
