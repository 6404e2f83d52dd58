"""Test fixtures for repository tests"""

from __future__ import annotations

import tempfile
from typing import AsyncGenerator

import pytest
import pytest_asyncio

from refcreators.db.entities import CreatorEntity, ItemCreatorEntity


# Test data fixtures
@pytest.fixture
def sample_creators() -> list[CreatorEntity]:
    """Create sample creator entities"""
    return [
        CreatorEntity(id=1, first_name="Ada", last_name="Lovelace", field_mode=0),
        CreatorEntity(id=2, first_name="", last_name="Plato", field_mode=1),
        CreatorEntity(id=3, first_name="Charles", last_name="Babbage", field_mode=0),
    ]


@pytest.fixture
def sample_item_creators() -> list[ItemCreatorEntity]:
    """Associations for item 1: Ada as author, Plato as editor"""
    return [
        ItemCreatorEntity(item_id=1, creator_id=1, creator_type_id=1, order_index=0),
        ItemCreatorEntity(item_id=1, creator_id=2, creator_type_id=3, order_index=1),
    ]


# SQLAlchemy fixtures
@pytest_asyncio.fixture
async def sql_uow(session_factory) -> AsyncGenerator:
    """SQLAlchemy Unit of Work over the in-memory SQLite store"""
    from refcreators.db.repositories.postgres import PostgresUnitOfWork

    async with session_factory() as session:
        uow = PostgresUnitOfWork(session)
        yield uow
        await session.rollback()


# SurrealDB fixtures
@pytest_asyncio.fixture
async def surreal_client() -> AsyncGenerator:
    """Create a temporary SurrealDB client for testing"""
    # Skip if surrealdb not installed
    pytest.importorskip("surrealdb")

    from surrealdb import AsyncSurreal
    from refcreators.db.surrealdb.connection import apply_schema

    # Use temporary directory for test database
    with tempfile.TemporaryDirectory() as tmpdir:
        url = f"file://{tmpdir}/test"

        client = AsyncSurreal(url)
        await client.connect()
        await client.use("test", "test")
        await apply_schema(client)

        yield client

        await client.close()


@pytest_asyncio.fixture
async def surreal_uow(surreal_client) -> AsyncGenerator:
    """Create a SurrealDB Unit of Work for testing"""
    from refcreators.db.repositories.surrealdb import SurrealUnitOfWork

    uow = SurrealUnitOfWork(surreal_client)
    yield uow
