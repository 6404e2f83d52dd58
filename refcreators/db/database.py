"""Database connection and session management"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import select
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from .config import settings
from .models import Base, CreatorType
from ..creator_types import BUILTIN_CREATOR_TYPES


def _engine_options(url: str) -> dict:
    # SQLite's async driver uses a static pool and rejects pool sizing
    if url.startswith("sqlite"):
        return {}
    return {"pool_size": 5, "max_overflow": 10}


engine = create_async_engine(
    settings.database_url,
    echo=settings.debug,
    **_engine_options(settings.database_url),
)

async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def seed_creator_types(session: AsyncSession) -> None:
    """Insert builtin creator types that are not present yet"""
    result = await session.execute(select(CreatorType.creator_type_id))
    existing = set(result.scalars().all())
    for type_id, name in BUILTIN_CREATOR_TYPES.items():
        if type_id not in existing:
            session.add(CreatorType(creator_type_id=type_id, name=name))
    await session.flush()


async def init_db() -> None:
    """Initialize database tables and builtin creator types"""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    async with async_session_factory() as session:
        await seed_creator_types(session)
        await session.commit()


async def close_db() -> None:
    """Close database connections"""
    await engine.dispose()


@asynccontextmanager
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """Get async database session"""
    async with async_session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
