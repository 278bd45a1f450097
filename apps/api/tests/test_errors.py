"""Tests for error taxonomy and the {"error": ...} rendering."""
import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from agentcrm.core.errors import (
    CRMError,
    DuplicateError,
    Forbidden,
    NotFoundError,
    StorageError,
    Unauthenticated,
    ValidationError,
)
from agentcrm.db.base import Base
from agentcrm.db.session import storage_guard


# =============================================================================
# Taxonomy
# =============================================================================

@pytest.mark.parametrize("error_cls,status_code", [
    (Unauthenticated, 401),
    (Forbidden, 403),
    (ValidationError, 400),
    (DuplicateError, 400),
    (NotFoundError, 404),
    (StorageError, 500),
])
def test_status_codes(error_cls, status_code):
    assert error_cls.status_code == status_code
    assert issubclass(error_cls, CRMError)


def test_message_defaults():
    assert Unauthenticated().message == "Missing Authorization header"
    assert Forbidden().message == "Invalid API Key"
    assert NotFoundError("Contact not found").message == "Contact not found"


def test_storage_error_hides_detail():
    error = StorageError("insert contacts: disk I/O error")
    assert error.message == "Internal server error"
    assert error.detail == "insert contacts: disk I/O error"


def test_storage_guard_wraps_database_errors(db):
    with pytest.raises(StorageError) as exc_info:
        with storage_guard(db, "list contacts"):
            raise OperationalError("SELECT 1", {}, Exception("database is locked"))
    assert exc_info.value.detail.startswith("list contacts:")
    assert isinstance(exc_info.value.__cause__, OperationalError)


def test_storage_guard_passes_other_errors(db):
    with pytest.raises(NotFoundError):
        with storage_guard(db, "get contacts"):
            raise NotFoundError("Contact not found")


# =============================================================================
# Rendering
# =============================================================================

@pytest.mark.asyncio
async def test_storage_failure_renders_generic_500(app, authed_client: AsyncClient):
    Base.metadata.tables["contacts"].drop(app.state.engine)

    response = await authed_client.get("/contacts")
    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}


@pytest.mark.asyncio
async def test_non_integer_id_is_rejected(authed_client: AsyncClient):
    response = await authed_client.get("/contacts/abc")
    assert response.status_code == 400
    assert response.json()["error"].startswith("Invalid value for 'record_id'")


@pytest.mark.asyncio
async def test_request_id_echoed(client: AsyncClient):
    response = await client.get("/status", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


@pytest.mark.asyncio
async def test_request_id_generated(client: AsyncClient):
    response = await client.get("/status")
    assert len(response.headers["X-Request-ID"]) == 32
