"""Tests for the creator type registry"""

from __future__ import annotations

import pytest

from refcreators.creator_types import BUILTIN_CREATOR_TYPES, CreatorTypeRegistry
from refcreators.db.entities import CreatorTypeEntity


class TestCreatorTypeRegistry:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("author", 1),
            ("Editor", 3),
            (" translator ", 4),
            ("bookAuthor", 29),
            (2, 2),
            ("5", 5),
        ],
    )
    def test_get_id(self, registry, value, expected):
        assert registry.get_id(value) == expected

    @pytest.mark.parametrize("value", ["muse", "", 0, 99, "99", None, True, 1.0, ["author"]])
    def test_get_id_unknown(self, registry, value):
        assert registry.get_id(value) is None

    def test_get_name(self, registry):
        assert registry.get_name(1) == "author"
        assert registry.get_name(99) is None
        assert registry.get_name(None) is None

    def test_contains(self, registry):
        assert "author" in registry
        assert "muse" not in registry

    def test_names_sorted_by_id(self, registry):
        names = registry.names()
        assert names[0] == "author"
        assert len(names) == len(BUILTIN_CREATOR_TYPES)

    @pytest.mark.asyncio
    async def test_load_from_store(self, uow_factory):
        async with uow_factory() as uow:
            await uow.creator_types.upsert(CreatorTypeEntity(id=100, name="illustrator"))

        registry = CreatorTypeRegistry({})
        assert registry.get_id("author") is None

        async with uow_factory() as uow:
            await registry.load(uow)
        assert registry.get_id("illustrator") == 100
        assert registry.get_id("author") == 1
