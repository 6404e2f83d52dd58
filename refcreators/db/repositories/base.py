"""Abstract repository interfaces - backend agnostic"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from ..entities import (
    CreatorEntity,
    ItemCreatorEntity,
    CreatorTypeEntity,
)


class CreatorRepository(ABC):
    """Repository for creator rows"""

    @abstractmethod
    async def get(self, creator_id: int) -> Optional[CreatorEntity]:
        """Get creator by ID"""
        ...

    @abstractmethod
    async def get_id_by_fields(
        self,
        first_name: str,
        last_name: str,
        field_mode: int,
    ) -> Optional[int]:
        """Get the ID of the creator whose name fields match exactly"""
        ...

    @abstractmethod
    async def next_id(self) -> int:
        """Allocate the next unused creator ID"""
        ...

    @abstractmethod
    async def create(self, entity: CreatorEntity) -> int:
        """Insert a creator, return its ID"""
        ...

    @abstractmethod
    async def update(self, entity: CreatorEntity) -> None:
        """Overwrite the name fields of an existing creator"""
        ...

    @abstractmethod
    async def count_item_associations(self, creator_id: int) -> int:
        """Count item associations referencing a creator"""
        ...

    @abstractmethod
    async def list_items_with_creator(self, creator_id: int) -> list[int]:
        """List distinct item IDs referencing a creator"""
        ...

    @abstractmethod
    async def list_unreferenced_ids(self) -> list[int]:
        """List IDs of creators with no item associations"""
        ...

    @abstractmethod
    async def delete_unreferenced(self) -> int:
        """Delete creators with no item associations, return count deleted"""
        ...


class ItemCreatorRepository(ABC):
    """Repository for item/creator associations"""

    @abstractmethod
    async def create_many(self, entities: Sequence[ItemCreatorEntity]) -> int:
        """Insert associations, return count"""
        ...

    @abstractmethod
    async def list_by_item(self, item_id: int) -> list[ItemCreatorEntity]:
        """List associations of an item ordered by position"""
        ...

    @abstractmethod
    async def delete_by_item(self, item_id: int) -> int:
        """Delete all associations of an item, return count deleted"""
        ...


class CreatorTypeRepository(ABC):
    """Repository for creator type labels"""

    @abstractmethod
    async def list(self) -> list[CreatorTypeEntity]:
        """List all creator types"""
        ...

    @abstractmethod
    async def upsert(self, entity: CreatorTypeEntity) -> int:
        """Create or rename a creator type by ID"""
        ...


class PreferenceRepository(ABC):
    """Repository for persistent key/value flags"""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Get raw value for key"""
        ...

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Set value for key"""
        ...

    async def get_bool(self, key: str, default: bool = False) -> bool:
        """Get a boolean flag"""
        value = await self.get(key)
        if value is None:
            return default
        return value.lower() in ("1", "true", "yes")

    async def set_bool(self, key: str, value: bool) -> None:
        """Set a boolean flag"""
        await self.set(key, "true" if value else "false")


class UnitOfWork(ABC):
    """Unit of work pattern for transaction management"""

    creators: CreatorRepository
    item_creators: ItemCreatorRepository
    creator_types: CreatorTypeRepository
    preferences: PreferenceRepository

    @abstractmethod
    async def __aenter__(self) -> "UnitOfWork":
        ...

    @abstractmethod
    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        ...

    @abstractmethod
    async def commit(self) -> None:
        """Commit the transaction"""
        ...

    @abstractmethod
    async def rollback(self) -> None:
        """Rollback the transaction"""
        ...
