"""PostgreSQL implementation of ItemCreatorRepository"""

from __future__ import annotations

from typing import Sequence

from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from ...models import ItemCreator
from ...entities import ItemCreatorEntity
from ..base import ItemCreatorRepository


class PostgresItemCreatorRepository(ItemCreatorRepository):
    """PostgreSQL implementation using SQLAlchemy"""

    def __init__(self, session: AsyncSession):
        self._session = session

    def _to_entity(self, model: ItemCreator) -> ItemCreatorEntity:
        return ItemCreatorEntity(
            item_id=model.item_id,
            creator_id=model.creator_id,
            creator_type_id=model.creator_type_id,
            order_index=model.order_index,
        )

    async def create_many(self, entities: Sequence[ItemCreatorEntity]) -> int:
        """Insert associations, return count"""
        models = [
            ItemCreator(
                item_id=e.item_id,
                creator_id=e.creator_id,
                creator_type_id=e.creator_type_id,
                order_index=e.order_index,
            )
            for e in entities
        ]
        self._session.add_all(models)
        await self._session.flush()
        return len(models)

    async def list_by_item(self, item_id: int) -> list[ItemCreatorEntity]:
        """List associations of an item ordered by position"""
        result = await self._session.execute(
            select(ItemCreator)
            .where(ItemCreator.item_id == item_id)
            .order_by(ItemCreator.order_index)
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    async def delete_by_item(self, item_id: int) -> int:
        """Delete all associations of an item, return count deleted"""
        result = await self._session.execute(
            delete(ItemCreator).where(ItemCreator.item_id == item_id)
        )
        return result.rowcount or 0
