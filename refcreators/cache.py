"""Process-wide cache of persisted creators, keyed by creator ID"""

from __future__ import annotations

from typing import Iterable, Iterator, Optional

from .normalize import CanonicalCreator
from .observability import metrics


class CreatorCache:
    """
    Unbounded creator cache.

    Entries are filled lazily on first read and only removed by `evict`
    (purge) or `clear` (shutdown, test teardown). Every method is
    synchronous, so a read or write never spans an await.

    `generation` advances on every eviction. A reader that fetched from the
    store across an await passes the generation it started with to
    `set_if_current`, so a row read before a purge is never cached after it.
    """

    def __init__(self):
        self._entries: dict[int, CanonicalCreator] = {}
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def get(self, creator_id: int) -> Optional[CanonicalCreator]:
        creator = self._entries.get(creator_id)
        if creator is None:
            metrics.increment("cache_misses")
        else:
            metrics.increment("cache_hits")
        return creator

    def set(self, creator_id: int, creator: CanonicalCreator) -> CanonicalCreator:
        self._entries[creator_id] = creator
        metrics.set_gauge("cached_creators", len(self._entries))
        return creator

    def set_if_current(
        self,
        creator_id: int,
        creator: CanonicalCreator,
        generation: int,
    ) -> CanonicalCreator:
        """
        Cache `creator` unless an eviction happened since `generation`.

        On a stale generation any existing entry for the ID is dropped as
        well, so the next read goes back to the store.
        """
        if generation == self._generation:
            self.set(creator_id, creator)
        elif self._entries.pop(creator_id, None) is not None:
            metrics.set_gauge("cached_creators", len(self._entries))
        return creator

    def evict(self, creator_ids: Iterable[int]) -> int:
        """Drop entries, return how many were cached"""
        self._generation += 1
        removed = 0
        for creator_id in creator_ids:
            if self._entries.pop(creator_id, None) is not None:
                removed += 1
        metrics.set_gauge("cached_creators", len(self._entries))
        return removed

    def clear(self) -> None:
        self._generation += 1
        self._entries.clear()
        metrics.set_gauge("cached_creators", 0)

    def __contains__(self, creator_id: int) -> bool:
        return creator_id in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[int]:
        return iter(list(self._entries))
