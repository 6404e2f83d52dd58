"""Creator lookup, identity resolution, updates and purging"""

from __future__ import annotations

from contextlib import AbstractAsyncContextManager
from typing import Any, Callable, Mapping, Optional, Sequence, Union

from .cache import CreatorCache
from .creator_types import CreatorTypeRegistry, registry as default_registry
from .db.entities import CreatorEntity, ItemCreatorEntity
from .db.repositories.base import UnitOfWork
from .errors import NotFoundError
from .normalize import CanonicalCreator, CreatorInput, normalize
from .observability import (
    DiagnosticChannel,
    diagnostics as default_diagnostics,
    log_with_context,
    logger,
    metrics,
    track_latency,
)


PURGE_FLAG = "purge.creators"

CreatorData = Union[Mapping[str, Any], CreatorInput, CanonicalCreator]
UnitOfWorkFactory = Callable[[], AbstractAsyncContextManager[UnitOfWork]]


def _default_uow_factory() -> AbstractAsyncContextManager[UnitOfWork]:
    from .db.repositories.factory import get_unit_of_work
    return get_unit_of_work()


class CreatorService:
    """
    Creator records over a unit-of-work backed store.

    Each public operation runs in its own unit of work, which commits on
    success and rolls back on error. Persisted creators are cached by ID
    for the lifetime of the service.
    """

    def __init__(
        self,
        uow_factory: Optional[UnitOfWorkFactory] = None,
        cache: Optional[CreatorCache] = None,
        registry: Optional[CreatorTypeRegistry] = None,
        diagnostics: Optional[DiagnosticChannel] = None,
    ):
        self._uow_factory = uow_factory or _default_uow_factory
        self.cache = cache if cache is not None else CreatorCache()
        self.registry = registry or default_registry
        self.diagnostics = diagnostics or default_diagnostics

    def normalize(self, data: CreatorData) -> CanonicalCreator:
        """Validate and canonicalize creator data against this service's registry"""
        return normalize(data, self.registry, self.diagnostics)

    async def load_creator_types(self) -> None:
        """Refresh the creator type registry from the store"""
        async with self._uow_factory() as uow:
            await self.registry.load(uow)

    @track_latency("fetch")
    async def get(self, creator_id: int) -> CanonicalCreator:
        """
        Get creator data for an ID.

        Cached records are returned without touching the store.

        Raises:
            NotFoundError: if the ID is empty or no such creator exists
        """
        if not creator_id:
            raise NotFoundError(creator_id)

        cached = self.cache.get(creator_id)
        if cached is not None:
            return cached

        generation = self.cache.generation
        async with self._uow_factory() as uow:
            entity = await uow.creators.get(creator_id)
        if entity is None:
            raise NotFoundError(creator_id)

        creator = self.normalize({
            "firstName": entity.first_name,
            "lastName": entity.last_name,
            "fieldMode": entity.field_mode,
        })
        # A purge may have evicted this ID while the row was being read
        return self.cache.set_if_current(creator_id, creator, generation)

    async def _resolve(
        self,
        uow: UnitOfWork,
        creator: CanonicalCreator,
        create: bool,
    ) -> Optional[int]:
        creator_id = await uow.creators.get_id_by_fields(*creator.key)
        if creator_id is None and create:
            creator_id = await uow.creators.create(
                CreatorEntity(
                    id=await uow.creators.next_id(),
                    first_name=creator.first_name,
                    last_name=creator.last_name,
                    field_mode=int(creator.field_mode),
                )
            )
            metrics.increment("create_count")
            log_with_context(creator_id=creator_id).debug("Created creator")
        return creator_id

    @track_latency("resolve")
    async def resolve_or_create(self, data: CreatorData, create: bool = False) -> Optional[int]:
        """
        Return the ID of the creator matching `data`, creating one if asked.

        Matching uses (firstName, lastName, fieldMode) only; the creator
        type is attached per item and never distinguishes identities. The
        lookup and insert share one transaction.

        Args:
            data: Creator data in API JSON format
            create: If no matching creator exists, create one

        Returns:
            Creator ID, or None when absent and `create` is False
        """
        creator = self.normalize(data)
        async with self._uow_factory() as uow:
            return await self._resolve(uow, creator, create)

    # Alias matching the API JSON vocabulary
    get_id_from_data = resolve_or_create

    async def update_creator(self, creator_id: int, data: CreatorData) -> bool:
        """
        Overwrite a creator's name fields.

        Raises:
            NotFoundError: if the creator doesn't exist
        """
        await self.get(creator_id)

        if isinstance(data, CanonicalCreator):
            data = data.to_raw()
        if isinstance(data, Mapping):
            data = {
                key: data[key]
                for key in ("name", "firstName", "lastName", "fieldMode")
                if key in data
            }
        updated = self.normalize(data)

        generation = self.cache.generation
        async with self._uow_factory() as uow:
            await uow.creators.update(
                CreatorEntity(
                    id=creator_id,
                    first_name=updated.first_name,
                    last_name=updated.last_name,
                    field_mode=int(updated.field_mode),
                )
            )
        # Type IDs are per-usage, so the cached record never carries one
        self.cache.set_if_current(
            creator_id,
            CanonicalCreator(updated.first_name, updated.last_name, updated.field_mode),
            generation,
        )
        metrics.increment("update_count")
        return True

    async def get_items_with_creator(self, creator_id: int) -> list[int]:
        """Distinct item IDs that reference a creator"""
        async with self._uow_factory() as uow:
            return await uow.creators.list_items_with_creator(creator_id)

    async def count_item_associations(self, creator_id: int) -> int:
        """Number of item associations referencing a creator"""
        async with self._uow_factory() as uow:
            return await uow.creators.count_item_associations(creator_id)

    async def set_item_creators(self, item_id: int, creators: Sequence[CreatorData]) -> list[int]:
        """
        Replace the creators of an item.

        Every entry is validated before the store is touched. Creators are
        resolved or created, and each association keeps its own creator type.
        Dropping existing associations marks the creator tables for purging.

        Returns:
            Creator IDs in item order
        """
        canonical = [self.normalize(c) for c in creators]

        async with self._uow_factory() as uow:
            removed = await uow.item_creators.delete_by_item(item_id)
            creator_ids = [await self._resolve(uow, c, create=True) for c in canonical]
            await uow.item_creators.create_many([
                ItemCreatorEntity(
                    item_id=item_id,
                    creator_id=creator_id,
                    creator_type_id=c.creator_type_id,
                    order_index=i,
                )
                for i, (creator_id, c) in enumerate(zip(creator_ids, canonical))
            ])
            if removed:
                await uow.preferences.set_bool(PURGE_FLAG, True)
        return creator_ids

    async def remove_item_creators(self, item_id: int) -> int:
        """Drop all creator associations of an item, return count removed"""
        async with self._uow_factory() as uow:
            removed = await uow.item_creators.delete_by_item(item_id)
            if removed:
                await uow.preferences.set_bool(PURGE_FLAG, True)
        return removed

    @track_latency("purge")
    async def purge(self) -> list[int]:
        """
        Delete creators no item references and drop them from the cache.

        Does nothing unless the purge flag is set; clears the flag afterwards.

        Returns:
            IDs of the purged creators
        """
        async with self._uow_factory() as uow:
            if not await uow.preferences.get_bool(PURGE_FLAG):
                return []

            logger.info("Purging creator tables")
            to_delete = await uow.creators.list_unreferenced_ids()
            if to_delete:
                await uow.creators.delete_unreferenced()
            await uow.preferences.set_bool(PURGE_FLAG, False)

        # Evict right after commit, with no await in between
        self.cache.evict(to_delete)
        metrics.increment("purged_creators", len(to_delete))
        log_with_context(purged=len(to_delete)).info("Purged creators")
        return to_delete


# Singleton service
_service: Optional[CreatorService] = None


def get_creator_service() -> CreatorService:
    """Get the process-wide creator service"""
    global _service
    if _service is None:
        _service = CreatorService()
    return _service


def reset_creator_service() -> None:
    """Drop the process-wide service and its cache (useful for testing)"""
    global _service
    if _service is not None:
        _service.cache.clear()
    _service = None
