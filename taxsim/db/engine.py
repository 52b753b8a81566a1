"""Async PostgreSQL engine, sessions and startup/shutdown hooks.

SQLAlchemy 2.0 async over asyncpg. One session per request, committed
when the handler returns and rolled back if it raises.
"""

from __future__ import annotations

import contextlib
import logging
from collections.abc import AsyncGenerator, AsyncIterator

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from taxsim.config import settings

logger = logging.getLogger(__name__)


def build_engine(database_url: str | None = None) -> AsyncEngine:
    """Create the async engine from settings (or an explicit URL)."""
    return create_async_engine(
        database_url or settings.db.database_url,
        echo=settings.log_level == "DEBUG",
        pool_size=settings.db.pool_size,
        pool_pre_ping=True,
        pool_recycle=3600,
    )


engine: AsyncEngine = build_engine()

async_session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@contextlib.asynccontextmanager
async def session_scope() -> AsyncIterator[AsyncSession]:
    """Transactional session: commit on success, rollback on error."""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding a request-scoped session.

    Usage:
        @router.get("/example")
        async def handler(db: AsyncSession = Depends(get_session)):
            ...
    """
    async with session_scope() as session:
        yield session


# ── Lifespan helpers ─────────────────────────────────────────────────


async def create_schema() -> None:
    """Create missing tables. Production schemas are managed by Alembic."""
    from taxsim.models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def seed_rate_tables() -> int:
    """Insert default rate tables for years with no stored row."""
    from taxsim.simulations.repository import seed_default_tax_year_configs

    async with session_scope() as session:
        inserted = await seed_default_tax_year_configs(session)
    logger.info("Seeded %d default tax year configs", inserted)
    return inserted


async def init_db() -> None:
    """Prepare the database at startup."""
    if not settings.is_production:
        await create_schema()
    if settings.simulator.seed_default_rates:
        await seed_rate_tables()


async def close_db() -> None:
    """Dispose the engine's connection pool."""
    await engine.dispose()


@contextlib.asynccontextmanager
async def db_lifespan() -> AsyncIterator[None]:
    """Database lifecycle for the FastAPI lifespan.

    Usage:
        async with db_lifespan():
            yield
    """
    await init_db()
    try:
        yield
    finally:
        await close_db()
