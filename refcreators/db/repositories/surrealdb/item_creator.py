"""SurrealDB implementation of ItemCreatorRepository"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from ...entities import ItemCreatorEntity
from ..base import ItemCreatorRepository
from ._records import count_of

if TYPE_CHECKING:
    from surrealdb import AsyncSurreal


class SurrealItemCreatorRepository(ItemCreatorRepository):
    """SurrealDB implementation using SurrealQL"""

    def __init__(self, client: "AsyncSurreal"):
        self._client = client

    def _to_entity(self, record: dict) -> ItemCreatorEntity:
        return ItemCreatorEntity(
            item_id=record.get("item_id"),
            creator_id=record.get("creator_id"),
            creator_type_id=record.get("creator_type_id"),
            order_index=record.get("order_index", 0),
        )

    async def create_many(self, entities: Sequence[ItemCreatorEntity]) -> int:
        """Insert associations, return count"""
        for entity in entities:
            await self._client.query(
                """
                CREATE item_creator CONTENT {
                    item_id: $item_id,
                    creator_id: $creator_id,
                    creator_type_id: $creator_type_id,
                    order_index: $order_index
                }
                """,
                {
                    "item_id": entity.item_id,
                    "creator_id": entity.creator_id,
                    "creator_type_id": entity.creator_type_id,
                    "order_index": entity.order_index,
                },
            )
        return len(entities)

    async def list_by_item(self, item_id: int) -> list[ItemCreatorEntity]:
        """List associations of an item ordered by position"""
        result = await self._client.query(
            "SELECT * FROM item_creator WHERE item_id = $item_id ORDER BY order_index",
            {"item_id": item_id},
        )

        if result:
            return [self._to_entity(r) for r in result]
        return []

    async def delete_by_item(self, item_id: int) -> int:
        """Delete all associations of an item, return count deleted"""
        count_result = await self._client.query(
            "SELECT count() FROM item_creator WHERE item_id = $item_id GROUP ALL",
            {"item_id": item_id},
        )
        count = count_of(count_result)

        await self._client.query(
            "DELETE FROM item_creator WHERE item_id = $item_id",
            {"item_id": item_id},
        )

        return count
