"""Integration test fixtures for dual-backend testing"""

from __future__ import annotations

import tempfile
from contextlib import asynccontextmanager
from typing import AsyncGenerator

import pytest
import pytest_asyncio

from refcreators.cache import CreatorCache
from refcreators.creator_types import CreatorTypeRegistry
from refcreators.creators import CreatorService
from refcreators.observability import DiagnosticChannel


@pytest.fixture(params=["sqlite", "surrealdb"])
def backend(request):
    """Parameterized fixture for testing both backends"""
    return request.param


@pytest_asyncio.fixture
async def uow_factory_for_backend(backend, session_factory) -> AsyncGenerator:
    """Unit of work factory for the specified backend"""
    if backend == "surrealdb":
        # Skip if surrealdb not installed
        pytest.importorskip("surrealdb")

        from surrealdb import AsyncSurreal
        from refcreators.db.repositories.surrealdb import SurrealUnitOfWork
        from refcreators.db.surrealdb.connection import apply_schema

        # Use temporary directory (each test gets clean slate)
        with tempfile.TemporaryDirectory() as tmpdir:
            client = AsyncSurreal(f"file://{tmpdir}/test")
            await client.connect()
            await client.use("test", "test")
            await apply_schema(client)

            @asynccontextmanager
            async def factory():
                uow = SurrealUnitOfWork(client)
                try:
                    yield uow
                    await uow.commit()
                except Exception:
                    await uow.rollback()
                    raise

            yield factory

            await client.close()

    else:
        from refcreators.db.repositories.postgres import PostgresUnitOfWork

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

        yield factory


@pytest.fixture
def backend_service(uow_factory_for_backend) -> CreatorService:
    """Creator service with its own cache and registry on the selected backend"""
    svc = CreatorService(
        uow_factory=uow_factory_for_backend,
        cache=CreatorCache(),
        registry=CreatorTypeRegistry(),
        diagnostics=DiagnosticChannel(),
    )
    yield svc
    svc.cache.clear()
