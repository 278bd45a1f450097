"""Tests for read-side lookup fields (LEFT JOIN display values)."""
import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_campaign_test_shows_campaign_name(authed_client: AsyncClient):
    campaign_id = (
        await authed_client.post("/marketing-campaigns", json={"name": "Spring Push"})
    ).json()["id"]
    test_id = (
        await authed_client.post(
            "/campaign-tests", json={"campaign_id": campaign_id, "test_type": "headline"}
        )
    ).json()["id"]

    record = (await authed_client.get(f"/campaign-tests/{test_id}")).json()
    assert record["campaign_name"] == "Spring Push"

    listed = (await authed_client.get("/campaign-tests")).json()
    assert listed[0]["campaign_name"] == "Spring Push"


@pytest.mark.asyncio
async def test_dangling_reference_reads_null(authed_client: AsyncClient):
    test_id = (
        await authed_client.post("/campaign-tests", json={"campaign_id": 404})
    ).json()["id"]
    record = (await authed_client.get(f"/campaign-tests/{test_id}")).json()
    assert record["campaign_name"] is None


@pytest.mark.asyncio
async def test_content_remix_shows_source_post_title(authed_client: AsyncClient):
    post_id = (
        await authed_client.post("/content-posts", json={"platform": "ig", "title": "Launch"})
    ).json()["id"]
    remix_id = (
        await authed_client.post("/content-remixes", json={"source_post_id": post_id})
    ).json()["id"]

    record = (await authed_client.get(f"/content-remixes/{remix_id}")).json()
    assert record["source_post_title"] == "Launch"


@pytest.mark.asyncio
async def test_support_request_shows_client_and_project(authed_client: AsyncClient):
    contact_id = (
        await authed_client.post("/contacts", json={"full_name": "Dana Levi"})
    ).json()["id"]
    project_id = (await authed_client.post("/projects", json={"title": "Site"})).json()["id"]
    request_id = (
        await authed_client.post(
            "/support-requests",
            json={"client_id": contact_id, "project_id": project_id, "message": "Help"},
        )
    ).json()["id"]

    record = (await authed_client.get(f"/support-requests/{request_id}")).json()
    assert record["client_name"] == "Dana Levi"
    assert record["project_title"] == "Site"
    assert record["status"] == "new"


@pytest.mark.asyncio
async def test_lookup_fields_are_never_written(authed_client: AsyncClient):
    request_id = (
        await authed_client.post(
            "/support-requests", json={"message": "Help", "client_name": "Injected"}
        )
    ).json()["id"]
    record = (await authed_client.get(f"/support-requests/{request_id}")).json()
    assert record["client_name"] is None


@pytest.mark.asyncio
async def test_support_request_update_moves_updated_at(authed_client: AsyncClient):
    request_id = (
        await authed_client.post("/support-requests", json={"message": "Help"})
    ).json()["id"]
    before = (await authed_client.get(f"/support-requests/{request_id}")).json()

    await authed_client.put(
        f"/support-requests/{request_id}", json={"message": "Help", "status": "handled"}
    )
    after = (await authed_client.get(f"/support-requests/{request_id}")).json()
    assert after["status"] == "handled"
    assert after["created_at"] == before["created_at"]
    assert after["updated_at"] >= before["updated_at"]
