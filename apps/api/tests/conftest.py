"""
Test configuration and fixtures.

Provides:
- A fresh SQLite database and upload root per test (under tmp_path)
- An app built with create_app(settings) for those paths
- A registered principal and its API key
- HTTPX AsyncClient with and without the bearer header
"""
from typing import AsyncGenerator, Generator

import pytest
from httpx import AsyncClient, ASGITransport
from sqlalchemy.orm import Session

from agentcrm.core.config import Settings
from agentcrm.db.base import Base
from agentcrm.db.enums import Role
from agentcrm.db.models import Principal
from agentcrm.main import create_app
from agentcrm.services import principal_service

import agentcrm.db.models  # noqa: F401


TEST_API_KEY = "test-admin-key"


# =============================================================================
# Configuration
# =============================================================================

def make_settings(tmp_path, **overrides) -> Settings:
    values = dict(
        ENV="test",
        DATABASE_URL=f"sqlite:///{tmp_path / 'crm.sqlite'}",
        UPLOAD_ROOT=str(tmp_path / "uploads"),
        SENTRY_DSN="",
        ENFORCE_VIEWER_READ_ONLY=False,
        PURGE_ATTACHMENTS=True,
    )
    values.update(overrides)
    return Settings(**values)


# =============================================================================
# App / Database Fixtures
# =============================================================================

@pytest.fixture(scope="function")
def build_app(tmp_path):
    """Factory for apps on this test's database with setting overrides."""
    built = []

    def _build(**overrides):
        application = create_app(make_settings(tmp_path, **overrides))
        Base.metadata.create_all(application.state.engine)
        built.append(application)
        return application

    yield _build
    for application in built:
        application.state.engine.dispose()


@pytest.fixture(scope="function")
def app(build_app):
    """App wired to this test's database, with all tables created."""
    return build_app()


@pytest.fixture(scope="function")
def settings(app) -> Settings:
    return app.state.settings


@pytest.fixture(scope="function")
def db(app) -> Generator[Session, None, None]:
    """Session on the same database the app uses."""
    session = app.state.session_factory()
    yield session
    session.close()


@pytest.fixture(scope="function")
def principal(db: Session) -> Principal:
    """Registered admin principal holding TEST_API_KEY."""
    return principal_service.register_principal(
        db,
        name="Test Admin",
        email="admin@test.com",
        role=Role.ADMIN.value,
        api_key=TEST_API_KEY,
    )


# =============================================================================
# Client Fixtures
# =============================================================================

@pytest.fixture(scope="function")
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """
    Create unauthenticated AsyncClient for testing public endpoints.
    """
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as c:
        yield c


@pytest.fixture(scope="function")
async def authed_client(app, principal: Principal) -> AsyncGenerator[AsyncClient, None]:
    """
    Create AsyncClient sending the test principal's bearer API key.
    """
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"Authorization": f"Bearer {TEST_API_KEY}"},
    ) as c:
        yield c


@pytest.fixture(scope="function")
def client_factory():
    """
    Register a principal on a given app and return an AsyncClient for it.

    Use with ``async with client_factory(app, role="viewer") as c: ...``.
    """

    def _make(application, *, role: str = Role.ADMIN.value, api_key: str = TEST_API_KEY) -> AsyncClient:
        session = application.state.session_factory()
        try:
            principal_service.register_principal(
                session,
                name=f"Test {role.title()}",
                email=f"{api_key}@test.com",
                role=role,
                api_key=api_key,
            )
        finally:
            session.close()
        return AsyncClient(
            transport=ASGITransport(app=application),
            base_url="http://test",
            headers={"Authorization": f"Bearer {api_key}"},
        )

    return _make
