"""PostgreSQL implementation of CreatorTypeRepository"""

from __future__ import annotations

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ...models import CreatorType
from ...entities import CreatorTypeEntity
from ..base import CreatorTypeRepository


class PostgresCreatorTypeRepository(CreatorTypeRepository):
    """PostgreSQL implementation using SQLAlchemy"""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def list(self) -> list[CreatorTypeEntity]:
        """List all creator types"""
        result = await self._session.execute(
            select(CreatorType).order_by(CreatorType.creator_type_id)
        )
        return [
            CreatorTypeEntity(id=m.creator_type_id, name=m.name)
            for m in result.scalars().all()
        ]

    async def upsert(self, entity: CreatorTypeEntity) -> int:
        """Create or rename a creator type by ID"""
        existing = await self._session.get(CreatorType, entity.id)
        if existing:
            await self._session.execute(
                update(CreatorType)
                .where(CreatorType.creator_type_id == entity.id)
                .values(name=entity.name)
            )
        else:
            self._session.add(CreatorType(creator_type_id=entity.id, name=entity.name))
            await self._session.flush()
        return entity.id
