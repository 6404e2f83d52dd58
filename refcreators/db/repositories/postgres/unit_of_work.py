"""PostgreSQL Unit of Work implementation"""

from sqlalchemy.ext.asyncio import AsyncSession

from ..base import UnitOfWork
from .creator import PostgresCreatorRepository
from .item_creator import PostgresItemCreatorRepository
from .creator_type import PostgresCreatorTypeRepository
from .preference import PostgresPreferenceRepository


class PostgresUnitOfWork(UnitOfWork):
    """PostgreSQL implementation of Unit of Work pattern"""

    def __init__(self, session: AsyncSession):
        self._session = session
        self.creators = PostgresCreatorRepository(session)
        self.item_creators = PostgresItemCreatorRepository(session)
        self.creator_types = PostgresCreatorTypeRepository(session)
        self.preferences = PostgresPreferenceRepository(session)

    async def __aenter__(self) -> "PostgresUnitOfWork":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type is not None:
            await self.rollback()
        # Note: commit is NOT automatic - caller must explicitly commit

    async def commit(self) -> None:
        """Commit the transaction"""
        await self._session.commit()

    async def rollback(self) -> None:
        """Rollback the transaction"""
        await self._session.rollback()
