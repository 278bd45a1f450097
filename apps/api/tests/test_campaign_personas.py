"""Tests for campaign <-> persona links."""
import pytest
from httpx import AsyncClient


async def _persona(client: AsyncClient, name: str) -> int:
    return (await client.post("/persona-library", json={"name": name})).json()["id"]


@pytest.mark.asyncio
async def test_link_and_list_personas(authed_client: AsyncClient):
    first = await _persona(authed_client, "Busy founder")
    second = await _persona(authed_client, "Agency owner")

    response = await authed_client.post(
        "/campaigns/1/personas", json={"persona_ids": [first, second]}
    )
    assert response.status_code == 200
    assert response.json() == {"message": "Personas linked to campaign"}

    response = await authed_client.get("/campaigns/1/personas")
    assert response.status_code == 200
    assert [p["name"] for p in response.json()] == ["Busy founder", "Agency owner"]


@pytest.mark.asyncio
async def test_existing_links_are_ignored(authed_client: AsyncClient):
    persona_id = await _persona(authed_client, "Busy founder")

    await authed_client.post("/campaigns/1/personas", json={"persona_ids": [persona_id]})
    response = await authed_client.post(
        "/campaigns/1/personas", json={"persona_ids": [persona_id, persona_id]}
    )
    assert response.status_code == 200

    personas = (await authed_client.get("/campaigns/1/personas")).json()
    assert len(personas) == 1


@pytest.mark.asyncio
async def test_links_are_per_campaign(authed_client: AsyncClient):
    persona_id = await _persona(authed_client, "Busy founder")
    await authed_client.post("/campaigns/1/personas", json={"persona_ids": [persona_id]})

    assert (await authed_client.get("/campaigns/2/personas")).json() == []


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{}, {"persona_ids": 3}, {"persona_ids": "1,2"}, [1, 2]])
async def test_persona_ids_must_be_an_array(authed_client: AsyncClient, body):
    response = await authed_client.post("/campaigns/1/personas", json=body)
    assert response.status_code == 400
    assert response.json() == {"error": "persona_ids must be an array"}


@pytest.mark.asyncio
async def test_persona_ids_must_be_integers(authed_client: AsyncClient):
    response = await authed_client.post(
        "/campaigns/1/personas", json={"persona_ids": ["one"]}
    )
    assert response.status_code == 400
