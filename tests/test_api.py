"""Tests for the HTTP API"""

from __future__ import annotations

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from refcreators.api import app
from refcreators.creators import get_creator_service


@pytest_asyncio.fixture
async def client(service):
    """API client bound to the in-memory service; startup events are not run"""
    app.dependency_overrides[get_creator_service] = lambda: service
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


class TestCreatorEndpoints:
    @pytest.mark.asyncio
    async def test_resolve(self, client):
        response = await client.post("/creators/resolve", json={"creator": {"name": "Plato"}})
        assert response.status_code == 200
        assert response.json() == {"creator_id": None}

        response = await client.post(
            "/creators/resolve", json={"creator": {"name": "Plato"}, "create": True}
        )
        assert response.json() == {"creator_id": 1}

    @pytest.mark.asyncio
    async def test_resolve_invalid(self, client):
        response = await client.post(
            "/creators/resolve", json={"creator": {"name": "Plato", "lastName": "X"}}
        )
        assert response.status_code == 422
        assert response.json()["rule"] == "name-and-parts"

    @pytest.mark.asyncio
    async def test_get(self, client, service):
        creator_id = await service.resolve_or_create(
            {"firstName": "Ada", "lastName": "Lovelace"}, create=True
        )
        response = await client.get(f"/creators/{creator_id}")
        assert response.status_code == 200
        data = response.json()
        assert data["first_name"] == "Ada"
        assert data["field_mode"] == 0
        assert data["api_json"] == {"firstName": "Ada", "lastName": "Lovelace"}

    @pytest.mark.asyncio
    async def test_get_missing(self, client):
        response = await client.get("/creators/99")
        assert response.status_code == 404
        assert response.json()["detail"] == "Creator 99 not found"

    @pytest.mark.asyncio
    async def test_update(self, client, service):
        creator_id = await service.resolve_or_create({"name": "Plato"}, create=True)
        response = await client.put(f"/creators/{creator_id}", json={"name": "Platon"})
        assert response.json() == {"updated": True}
        assert (await service.get(creator_id)).last_name == "Platon"


class TestItemEndpoints:
    @pytest.mark.asyncio
    async def test_set_item_creators_and_purge(self, client):
        response = await client.put(
            "/items/1/creators",
            json=[{"name": "Plato", "creatorType": "author"}, {"name": "Aristotle"}],
        )
        assert response.json() == {"item_id": 1, "creator_ids": [1, 2]}

        response = await client.get("/creators/1/items")
        assert response.json() == {"creator_id": 1, "items": [1], "associations": 1}

        await client.put("/items/1/creators", json=[{"name": "Plato"}])
        response = await client.post("/maintenance/purge")
        assert response.status_code == 200
        assert response.json()["creator_ids"] == [2]


class TestServiceEndpoints:
    @pytest.mark.asyncio
    async def test_health(self, client):
        response = await client.get("/health")
        assert response.json()["status"] == "ok"

    @pytest.mark.asyncio
    async def test_metrics(self, client):
        await client.post("/creators/resolve", json={"creator": {"name": "Plato"}})
        response = await client.get("/metrics")
        assert response.json()["counters"]["resolve_count"] == 1
