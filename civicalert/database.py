"""Database setup with SQLAlchemy async."""

from sqlalchemy import inspect, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from civicalert.config import get_settings

settings = get_settings()


def _engine_options(database_url: str) -> dict:
    """Connection pool options; SQLite drivers manage their own pool."""
    if database_url.startswith("sqlite"):
        return {}
    return {"pool_pre_ping": True, "pool_size": 5, "max_overflow": 10}


engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    **_engine_options(settings.database_url),
)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


async def init_db(bind: AsyncEngine = engine) -> None:
    """Create database tables."""
    # Models register themselves on Base.metadata at import time.
    import civicalert.models  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def check_db_ready(bind: AsyncEngine = engine) -> None:
    """
    Verify database connectivity and expected schema.

    Raises RuntimeError if the incidents table is missing.
    """
    async with bind.connect() as conn:
        await conn.execute(text("SELECT 1"))

        has_table = await conn.run_sync(
            lambda sync_conn: inspect(sync_conn).has_table("incidents")
        )
        if not has_table:
            raise RuntimeError(
                "Database schema is missing tables: incidents "
                "(run database init or check migrations)."
            )
