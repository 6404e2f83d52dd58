"""SurrealDB implementation of CreatorRepository"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from ...entities import CreatorEntity
from ..base import CreatorRepository
from ._records import parse_record_key, first_record, count_of

if TYPE_CHECKING:
    from surrealdb import AsyncSurreal


class SurrealCreatorRepository(CreatorRepository):
    """SurrealDB implementation using SurrealQL"""

    def __init__(self, client: "AsyncSurreal"):
        self._client = client

    def _to_entity(self, record: dict) -> CreatorEntity:
        """Convert SurrealDB record to domain entity"""
        creator_id = record.get("creator_id")
        if creator_id is None:
            creator_id = int(parse_record_key(record.get("id", "")))
        return CreatorEntity(
            id=creator_id,
            first_name=record.get("first_name", ""),
            last_name=record.get("last_name", ""),
            field_mode=record.get("field_mode", 0),
        )

    async def get(self, creator_id: int) -> Optional[CreatorEntity]:
        """Get creator by ID"""
        from surrealdb import RecordID

        record = first_record(await self._client.select(RecordID("creator", creator_id)))
        return self._to_entity(record) if record else None

    async def get_id_by_fields(
        self,
        first_name: str,
        last_name: str,
        field_mode: int,
    ) -> Optional[int]:
        """Get the ID of the creator whose name fields match exactly"""
        result = await self._client.query(
            """
            SELECT creator_id FROM creator
            WHERE first_name = $first_name
                AND last_name = $last_name
                AND field_mode = $field_mode
            LIMIT 1
            """,
            {
                "first_name": first_name,
                "last_name": last_name,
                "field_mode": field_mode,
            },
        )

        if result:
            return result[0].get("creator_id")
        return None

    async def next_id(self) -> int:
        """Allocate the next unused creator ID"""
        result = await self._client.query(
            "SELECT math::max(creator_id) AS max_id FROM creator GROUP ALL",
            {},
        )

        if result and result[0].get("max_id") is not None:
            return int(result[0]["max_id"]) + 1
        return 1

    async def create(self, entity: CreatorEntity) -> int:
        """Insert a creator, return its ID"""
        from surrealdb import RecordID

        if entity.id is None:
            entity.id = await self.next_id()

        await self._client.query(
            """
            CREATE $id CONTENT {
                creator_id: $creator_id,
                first_name: $first_name,
                last_name: $last_name,
                field_mode: $field_mode
            }
            """,
            {
                "id": RecordID("creator", entity.id),
                "creator_id": entity.id,
                "first_name": entity.first_name,
                "last_name": entity.last_name,
                "field_mode": entity.field_mode,
            },
        )

        return entity.id

    async def update(self, entity: CreatorEntity) -> None:
        """Overwrite the name fields of an existing creator"""
        from surrealdb import RecordID

        await self._client.query(
            """
            UPDATE $id SET
                first_name = $first_name,
                last_name = $last_name,
                field_mode = $field_mode
            """,
            {
                "id": RecordID("creator", entity.id),
                "first_name": entity.first_name,
                "last_name": entity.last_name,
                "field_mode": entity.field_mode,
            },
        )

    async def count_item_associations(self, creator_id: int) -> int:
        """Count item associations referencing a creator"""
        result = await self._client.query(
            "SELECT count() FROM item_creator WHERE creator_id = $creator_id GROUP ALL",
            {"creator_id": creator_id},
        )
        return count_of(result)

    async def list_items_with_creator(self, creator_id: int) -> list[int]:
        """List distinct item IDs referencing a creator"""
        result = await self._client.query(
            "SELECT item_id FROM item_creator WHERE creator_id = $creator_id",
            {"creator_id": creator_id},
        )

        if result:
            return sorted({r["item_id"] for r in result})
        return []

    async def list_unreferenced_ids(self) -> list[int]:
        """List IDs of creators with no item associations"""
        result = await self._client.query(
            """
            SELECT creator_id FROM creator
            WHERE creator_id NOT IN (SELECT VALUE creator_id FROM item_creator)
            ORDER BY creator_id
            """,
            {},
        )

        if result:
            return [r["creator_id"] for r in result]
        return []

    async def delete_unreferenced(self) -> int:
        """Delete creators with no item associations, return count deleted"""
        # First count unreferenced creators
        count_result = await self._client.query(
            """
            SELECT count() FROM creator
            WHERE creator_id NOT IN (SELECT VALUE creator_id FROM item_creator)
            GROUP ALL
            """,
            {},
        )
        count = count_of(count_result)

        # Then delete
        await self._client.query(
            """
            DELETE FROM creator
            WHERE creator_id NOT IN (SELECT VALUE creator_id FROM item_creator)
            """,
            {},
        )

        return count
