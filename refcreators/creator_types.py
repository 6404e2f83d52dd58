"""Creator type registry: map role labels to stable numeric IDs and back"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Optional, Union

if TYPE_CHECKING:
    from .db.repositories.base import UnitOfWork


BUILTIN_CREATOR_TYPES: dict[int, str] = {
    1: "author",
    2: "contributor",
    3: "editor",
    4: "translator",
    5: "seriesEditor",
    6: "interviewee",
    7: "interviewer",
    8: "director",
    9: "scriptwriter",
    10: "producer",
    11: "castMember",
    12: "sponsor",
    13: "counsel",
    14: "inventor",
    15: "attorneyAgent",
    16: "recipient",
    17: "performer",
    18: "composer",
    19: "wordsBy",
    20: "cartographer",
    21: "programmer",
    22: "artist",
    23: "commenter",
    24: "presenter",
    25: "guest",
    26: "podcaster",
    27: "reviewedAuthor",
    28: "cosponsor",
    29: "bookAuthor",
}


class CreatorTypeRegistry:
    """
    In-memory label/ID lookup for creator types.

    Lookups are synchronous so that normalization stays a pure function of
    its input and the registry state; `load()` refreshes the state from the
    store.
    """

    def __init__(self, types: Optional[dict[int, str]] = None):
        self._names: dict[int, str] = {}
        self._ids: dict[str, int] = {}
        self._replace(BUILTIN_CREATOR_TYPES if types is None else types)

    def _replace(self, types: dict[int, str]) -> None:
        self._names = dict(types)
        self._ids = {name.lower(): type_id for type_id, name in types.items()}

    async def load(self, uow: "UnitOfWork") -> None:
        """Reload the registry from the creator_types table"""
        entities = await uow.creator_types.list()
        if entities:
            self._replace({e.id: e.name for e in entities})

    def get_id(self, label_or_id: Union[str, int, Any]) -> Optional[int]:
        """Resolve a label (case-insensitive) or a numeric ID to a known ID"""
        if isinstance(label_or_id, bool):
            return None
        if isinstance(label_or_id, int):
            return label_or_id if label_or_id in self._names else None
        if isinstance(label_or_id, str):
            key = label_or_id.strip()
            if key.isdigit():
                return self.get_id(int(key))
            return self._ids.get(key.lower())
        return None

    def get_name(self, type_id: Optional[int]) -> Optional[str]:
        """Resolve an ID to its label"""
        if type_id is None:
            return None
        return self._names.get(type_id)

    def names(self) -> list[str]:
        return [self._names[k] for k in sorted(self._names)]

    def __contains__(self, label_or_id) -> bool:
        return self.get_id(label_or_id) is not None


# Process-wide default registry, refreshed at startup
registry = CreatorTypeRegistry()
