"""SurrealDB Unit of Work implementation"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..base import UnitOfWork
from .creator import SurrealCreatorRepository
from .item_creator import SurrealItemCreatorRepository
from .creator_type import SurrealCreatorTypeRepository
from .preference import SurrealPreferenceRepository

if TYPE_CHECKING:
    from surrealdb import AsyncSurreal


class SurrealUnitOfWork(UnitOfWork):
    """
    SurrealDB implementation of Unit of Work pattern.

    No multi-statement transaction is held: every query commits on its own,
    so `commit` and `rollback` have nothing to do. Duplicate creators are
    rejected by the unique name index defined in schema.surql, and a purge
    that fails part way leaves the purge flag set so the next run retries.
    """

    def __init__(self, client: "AsyncSurreal"):
        self._client = client

        # Initialize repositories with shared client
        self.creators = SurrealCreatorRepository(client)
        self.item_creators = SurrealItemCreatorRepository(client)
        self.creator_types = SurrealCreatorTypeRepository(client)
        self.preferences = SurrealPreferenceRepository(client)

    async def __aenter__(self) -> "SurrealUnitOfWork":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        pass

    async def commit(self) -> None:
        """Each query is already committed"""

    async def rollback(self) -> None:
        """Statements already executed cannot be rolled back"""
