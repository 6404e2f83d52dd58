"""Shared fixtures: an in-memory SQLite store behind the SQLAlchemy backend"""

from __future__ import annotations

import os

# Must be set before refcreators.db.config is imported
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("LOG_JSON", "false")

from contextlib import asynccontextmanager
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from refcreators.cache import CreatorCache
from refcreators.creator_types import CreatorTypeRegistry
from refcreators.creators import CreatorService
from refcreators.db.database import seed_creator_types
from refcreators.db.models import Base
from refcreators.db.repositories.postgres import PostgresUnitOfWork
from refcreators.observability import DiagnosticChannel, metrics


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator:
    """Fresh in-memory database with builtin creator types"""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        await seed_creator_types(session)
        await session.commit()

    yield factory

    await engine.dispose()


@pytest.fixture
def uow_factory(session_factory):
    """Unit of work factory that commits on success and rolls back on error"""

    @asynccontextmanager
    async def factory():
        async with session_factory() as session:
            uow = PostgresUnitOfWork(session)
            try:
                yield uow
                await uow.commit()
            except Exception:
                await uow.rollback()
                raise

    return factory


@pytest.fixture
def registry() -> CreatorTypeRegistry:
    return CreatorTypeRegistry()


@pytest.fixture
def diagnostics() -> DiagnosticChannel:
    return DiagnosticChannel()


@pytest.fixture
def service(uow_factory, registry, diagnostics) -> CreatorService:
    svc = CreatorService(
        uow_factory=uow_factory,
        cache=CreatorCache(),
        registry=registry,
        diagnostics=diagnostics,
    )
    yield svc
    svc.cache.clear()


@pytest.fixture(autouse=True)
def reset_metrics():
    metrics.reset()
    yield
    metrics.reset()
