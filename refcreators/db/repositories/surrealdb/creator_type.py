"""SurrealDB implementation of CreatorTypeRepository"""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...entities import CreatorTypeEntity
from ..base import CreatorTypeRepository
from ._records import parse_record_key

if TYPE_CHECKING:
    from surrealdb import AsyncSurreal


class SurrealCreatorTypeRepository(CreatorTypeRepository):
    """SurrealDB implementation using SurrealQL"""

    def __init__(self, client: "AsyncSurreal"):
        self._client = client

    async def list(self) -> list[CreatorTypeEntity]:
        """List all creator types"""
        result = await self._client.query("SELECT * FROM creator_type", {})

        if result:
            entities = [
                CreatorTypeEntity(id=int(parse_record_key(r.get("id"))), name=r.get("name", ""))
                for r in result
            ]
            return sorted(entities, key=lambda e: e.id)
        return []

    async def upsert(self, entity: CreatorTypeEntity) -> int:
        """Create or rename a creator type by ID"""
        from surrealdb import RecordID

        await self._client.query(
            "UPSERT $id SET name = $name",
            {"id": RecordID("creator_type", entity.id), "name": entity.name},
        )
        return entity.id
