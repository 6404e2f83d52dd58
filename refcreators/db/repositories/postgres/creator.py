"""PostgreSQL implementation of CreatorRepository"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import select, func, update, delete
from sqlalchemy.ext.asyncio import AsyncSession

from ...models import Creator, ItemCreator
from ...entities import CreatorEntity
from ..base import CreatorRepository


class PostgresCreatorRepository(CreatorRepository):
    """PostgreSQL implementation using SQLAlchemy"""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: Creator) -> CreatorEntity:
        """Convert SQLAlchemy model to domain entity"""
        return CreatorEntity(
            id=model.creator_id,
            first_name=model.first_name,
            last_name=model.last_name,
            field_mode=model.field_mode,
        )

    def _to_model(self, entity: CreatorEntity) -> Creator:
        """Convert domain entity to SQLAlchemy model"""
        return Creator(
            creator_id=entity.id,
            first_name=entity.first_name,
            last_name=entity.last_name,
            field_mode=entity.field_mode,
        )

    async def get(self, creator_id: int) -> Optional[CreatorEntity]:
        """Get creator by ID"""
        result = await self._session.execute(
            select(Creator).where(Creator.creator_id == creator_id)
        )
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def get_id_by_fields(
        self,
        first_name: str,
        last_name: str,
        field_mode: int,
    ) -> Optional[int]:
        """Get the ID of the creator whose name fields match exactly"""
        result = await self._session.execute(
            select(Creator.creator_id)
            .where(Creator.first_name == first_name)
            .where(Creator.last_name == last_name)
            .where(Creator.field_mode == field_mode)
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def next_id(self) -> int:
        """Allocate the next unused creator ID"""
        result = await self._session.execute(select(func.max(Creator.creator_id)))
        return (result.scalar() or 0) + 1

    async def create(self, entity: CreatorEntity) -> int:
        """Insert a creator, return its ID"""
        if entity.id is None:
            entity.id = await self.next_id()
        model = self._to_model(entity)
        self._session.add(model)
        await self._session.flush()
        return model.creator_id

    async def update(self, entity: CreatorEntity) -> None:
        """Overwrite the name fields of an existing creator"""
        await self._session.execute(
            update(Creator)
            .where(Creator.creator_id == entity.id)
            .values(
                first_name=entity.first_name,
                last_name=entity.last_name,
                field_mode=entity.field_mode,
            )
        )

    async def count_item_associations(self, creator_id: int) -> int:
        """Count item associations referencing a creator"""
        result = await self._session.execute(
            select(func.count()).select_from(ItemCreator).where(ItemCreator.creator_id == creator_id)
        )
        return result.scalar() or 0

    async def list_items_with_creator(self, creator_id: int) -> list[int]:
        """List distinct item IDs referencing a creator"""
        result = await self._session.execute(
            select(ItemCreator.item_id)
            .where(ItemCreator.creator_id == creator_id)
            .distinct()
            .order_by(ItemCreator.item_id)
        )
        return list(result.scalars().all())

    async def list_unreferenced_ids(self) -> list[int]:
        """List IDs of creators with no item associations"""
        subquery = select(ItemCreator.creator_id)
        result = await self._session.execute(
            select(Creator.creator_id)
            .where(~Creator.creator_id.in_(subquery))
            .order_by(Creator.creator_id)
        )
        return list(result.scalars().all())

    async def delete_unreferenced(self) -> int:
        """Delete creators with no item associations, return count deleted"""
        subquery = select(ItemCreator.creator_id)
        result = await self._session.execute(
            delete(Creator).where(~Creator.creator_id.in_(subquery))
        )
        return result.rowcount or 0
