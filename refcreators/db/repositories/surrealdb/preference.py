"""SurrealDB implementation of PreferenceRepository"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from ..base import PreferenceRepository
from ._records import first_record

if TYPE_CHECKING:
    from surrealdb import AsyncSurreal


class SurrealPreferenceRepository(PreferenceRepository):
    """SurrealDB implementation using SurrealQL"""

    def __init__(self, client: "AsyncSurreal"):
        self._client = client

    async def get(self, key: str) -> Optional[str]:
        """Get raw value for key"""
        from surrealdb import RecordID

        record = first_record(await self._client.select(RecordID("setting", key)))
        return record.get("value") if record else None

    async def set(self, key: str, value: str) -> None:
        """Set value for key"""
        from surrealdb import RecordID

        await self._client.query(
            "UPSERT $id SET value = $value",
            {"id": RecordID("setting", key), "value": value},
        )
