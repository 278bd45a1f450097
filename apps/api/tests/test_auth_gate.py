"""Tests for the bearer API key gate."""
import pytest
from httpx import AsyncClient

from agentcrm.core.errors import Forbidden, Unauthenticated
from agentcrm.core.security import extract_bearer_token, generate_api_key


# =============================================================================
# Header parsing
# =============================================================================

def test_extract_bearer_token_returns_token():
    assert extract_bearer_token("Bearer abc123") == "abc123"


def test_extract_bearer_token_scheme_is_case_insensitive():
    assert extract_bearer_token("bearer abc123") == "abc123"


def test_extract_bearer_token_missing_header():
    with pytest.raises(Unauthenticated):
        extract_bearer_token(None)


@pytest.mark.parametrize(
    "header",
    ["", "Bearer", "Bearer ", "Token abc123", "abc123", "Bearer abc 123"],
)
def test_extract_bearer_token_malformed_header(header):
    with pytest.raises(Forbidden):
        extract_bearer_token(header)


def test_generate_api_key_is_random():
    keys = {generate_api_key() for _ in range(20)}
    assert len(keys) == 20
    assert all(len(key) >= 40 for key in keys)


# =============================================================================
# Gate behaviour over HTTP
# =============================================================================

@pytest.mark.asyncio
async def test_missing_header_is_unauthenticated(client: AsyncClient):
    response = await client.get("/contacts")
    assert response.status_code == 401
    assert response.json() == {"error": "Missing Authorization header"}


@pytest.mark.asyncio
async def test_unknown_key_is_forbidden(client: AsyncClient, principal):
    response = await client.get("/contacts", headers={"Authorization": "Bearer nope"})
    assert response.status_code == 403
    assert response.json() == {"error": "Invalid API Key"}


@pytest.mark.asyncio
async def test_malformed_header_is_forbidden(client: AsyncClient, principal):
    response = await client.get("/contacts", headers={"Authorization": "test-admin-key"})
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_valid_key_passes(authed_client: AsyncClient):
    response = await authed_client.get("/contacts")
    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
async def test_registration_is_public(client: AsyncClient):
    response = await client.post(
        "/users",
        json={"name": "New", "email": "new@test.com", "role": "agent", "api_key": "k-1"},
    )
    assert response.status_code == 201


@pytest.mark.asyncio
async def test_user_listing_is_protected(client: AsyncClient):
    response = await client.get("/users")
    assert response.status_code == 401


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method,path",
    [
        ("GET", "/leads/1"),
        ("POST", "/tasks"),
        ("PUT", "/projects/1"),
        ("DELETE", "/contacts/1"),
        ("GET", "/campaigns/1/personas"),
        ("GET", "/uploads/quotes/file.pdf"),
        ("GET", "/no-such-route"),
    ],
)
async def test_protected_routes_require_credential(client: AsyncClient, method, path):
    response = await client.request(method, path)
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_unknown_route_after_gate_is_not_found(authed_client: AsyncClient):
    response = await authed_client.get("/no-such-route")
    assert response.status_code == 404
    assert response.json() == {"error": "Route not found"}


@pytest.mark.asyncio
async def test_deleted_principal_key_stops_working(authed_client: AsyncClient, principal):
    response = await authed_client.delete(f"/users/{principal.id}")
    assert response.status_code == 200

    response = await authed_client.get("/contacts")
    assert response.status_code == 403
