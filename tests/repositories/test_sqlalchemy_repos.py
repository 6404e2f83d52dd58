"""Tests for SQLAlchemy repository implementations (SQLite in memory)"""

from __future__ import annotations

import pytest
from sqlalchemy.exc import IntegrityError

from refcreators.creator_types import BUILTIN_CREATOR_TYPES
from refcreators.db.entities import CreatorEntity, CreatorTypeEntity, ItemCreatorEntity


class TestSqlCreatorRepository:
    """Tests for PostgresCreatorRepository"""

    @pytest.mark.asyncio
    async def test_create_and_get(self, sql_uow, sample_creators):
        """Test creating and retrieving a creator"""
        creator_id = await sql_uow.creators.create(sample_creators[0])
        assert creator_id == 1

        retrieved = await sql_uow.creators.get(creator_id)
        assert retrieved == sample_creators[0]

    @pytest.mark.asyncio
    async def test_get_nonexistent(self, sql_uow):
        assert await sql_uow.creators.get(42) is None

    @pytest.mark.asyncio
    async def test_create_allocates_id(self, sql_uow):
        """Test that a creator without an ID gets max + 1"""
        await sql_uow.creators.create(CreatorEntity(id=7, last_name="Plato", field_mode=1))
        creator_id = await sql_uow.creators.create(CreatorEntity(last_name="Aristotle", field_mode=1))
        assert creator_id == 8
        assert await sql_uow.creators.next_id() == 9

    @pytest.mark.asyncio
    async def test_next_id_empty(self, sql_uow):
        assert await sql_uow.creators.next_id() == 1

    @pytest.mark.asyncio
    async def test_get_id_by_fields(self, sql_uow, sample_creators):
        """Test exact matching on all three name fields"""
        for creator in sample_creators:
            await sql_uow.creators.create(creator)

        assert await sql_uow.creators.get_id_by_fields("Ada", "Lovelace", 0) == 1
        assert await sql_uow.creators.get_id_by_fields("", "Plato", 1) == 2
        assert await sql_uow.creators.get_id_by_fields("", "Plato", 0) is None
        assert await sql_uow.creators.get_id_by_fields("ada", "Lovelace", 0) is None

    @pytest.mark.asyncio
    async def test_duplicate_name_fields_rejected(self, sql_uow, sample_creators):
        await sql_uow.creators.create(sample_creators[0])
        with pytest.raises(IntegrityError):
            await sql_uow.creators.create(
                CreatorEntity(id=10, first_name="Ada", last_name="Lovelace", field_mode=0)
            )

    @pytest.mark.asyncio
    async def test_update(self, sql_uow, sample_creators):
        await sql_uow.creators.create(sample_creators[0])
        await sql_uow.creators.update(
            CreatorEntity(id=1, first_name="Augusta Ada", last_name="King", field_mode=0)
        )
        retrieved = await sql_uow.creators.get(1)
        assert retrieved.first_name == "Augusta Ada"
        assert retrieved.last_name == "King"

    @pytest.mark.asyncio
    async def test_item_queries(self, sql_uow, sample_creators, sample_item_creators):
        for creator in sample_creators:
            await sql_uow.creators.create(creator)
        await sql_uow.item_creators.create_many(sample_item_creators)
        await sql_uow.item_creators.create_many(
            [ItemCreatorEntity(item_id=5, creator_id=1, order_index=0)]
        )

        assert await sql_uow.creators.list_items_with_creator(1) == [1, 5]
        assert await sql_uow.creators.count_item_associations(1) == 2
        assert await sql_uow.creators.count_item_associations(3) == 0
        assert await sql_uow.creators.list_items_with_creator(3) == []

    @pytest.mark.asyncio
    async def test_unreferenced(self, sql_uow, sample_creators, sample_item_creators):
        """Test listing and deleting creators no item references"""
        for creator in sample_creators:
            await sql_uow.creators.create(creator)
        await sql_uow.item_creators.create_many(sample_item_creators)

        assert await sql_uow.creators.list_unreferenced_ids() == [3]
        assert await sql_uow.creators.delete_unreferenced() == 1
        assert await sql_uow.creators.get(3) is None
        assert await sql_uow.creators.get(1) is not None
        assert await sql_uow.creators.list_unreferenced_ids() == []


class TestSqlItemCreatorRepository:
    """Tests for PostgresItemCreatorRepository"""

    @pytest.mark.asyncio
    async def test_create_and_list(self, sql_uow, sample_creators, sample_item_creators):
        for creator in sample_creators:
            await sql_uow.creators.create(creator)

        assert await sql_uow.item_creators.create_many(list(reversed(sample_item_creators))) == 2

        associations = await sql_uow.item_creators.list_by_item(1)
        assert associations == sample_item_creators

    @pytest.mark.asyncio
    async def test_delete_by_item(self, sql_uow, sample_creators, sample_item_creators):
        for creator in sample_creators:
            await sql_uow.creators.create(creator)
        await sql_uow.item_creators.create_many(sample_item_creators)

        assert await sql_uow.item_creators.delete_by_item(1) == 2
        assert await sql_uow.item_creators.delete_by_item(1) == 0
        assert await sql_uow.item_creators.list_by_item(1) == []


class TestSqlCreatorTypeRepository:
    """Tests for PostgresCreatorTypeRepository"""

    @pytest.mark.asyncio
    async def test_builtin_types_seeded(self, sql_uow):
        types = await sql_uow.creator_types.list()
        assert {t.id: t.name for t in types} == BUILTIN_CREATOR_TYPES

    @pytest.mark.asyncio
    async def test_upsert(self, sql_uow):
        await sql_uow.creator_types.upsert(CreatorTypeEntity(id=100, name="illustrator"))
        await sql_uow.creator_types.upsert(CreatorTypeEntity(id=4, name="translatorRenamed"))

        names = {t.id: t.name for t in await sql_uow.creator_types.list()}
        assert names[100] == "illustrator"
        assert names[4] == "translatorRenamed"


class TestSqlPreferenceRepository:
    """Tests for PostgresPreferenceRepository"""

    @pytest.mark.asyncio
    async def test_get_set(self, sql_uow):
        assert await sql_uow.preferences.get("missing") is None
        await sql_uow.preferences.set("key", "a")
        await sql_uow.preferences.set("key", "b")
        assert await sql_uow.preferences.get("key") == "b"

    @pytest.mark.asyncio
    async def test_bool_flags(self, sql_uow):
        assert await sql_uow.preferences.get_bool("flag") is False
        assert await sql_uow.preferences.get_bool("flag", default=True) is True

        await sql_uow.preferences.set_bool("flag", True)
        assert await sql_uow.preferences.get("flag") == "true"
        assert await sql_uow.preferences.get_bool("flag") is True

        await sql_uow.preferences.set("flag", "1")
        assert await sql_uow.preferences.get_bool("flag") is True

        await sql_uow.preferences.set_bool("flag", False)
        assert await sql_uow.preferences.get_bool("flag") is False
