"""FastAPI dependencies for authentication, authorization, and database access."""

import logging
from typing import Generator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from agentcrm.core.config import Settings
from agentcrm.core.errors import Forbidden
from agentcrm.core.security import extract_bearer_token
from agentcrm.db.enums import READ_ONLY_METHODS, Role
from agentcrm.db.models import Principal
from agentcrm.services import principal_service

logger = logging.getLogger(__name__)


def get_settings(request: Request) -> Settings:
    """Settings the running app was built with."""
    return request.app.state.settings


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Database session dependency.

    Yields a session from the app's session factory and ensures it's
    closed after the request.
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_current_principal(
    request: Request,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> Principal:
    """
    Auth gate for every protected route.

    Resolves the bearer API key to a principal and attaches it to
    ``request.state.principal``.

    Raises:
        Unauthenticated (401): no Authorization header
        Forbidden (403): malformed header, unknown key, or a viewer
            attempting a write while ENFORCE_VIEWER_READ_ONLY is on
    """
    token = extract_bearer_token(request.headers.get("Authorization"))
    principal = principal_service.find_by_key(db, token)
    if principal is None:
        logger.info("Rejected unknown API key for %s %s", request.method, request.url.path)
        raise Forbidden()

    if (
        settings.ENFORCE_VIEWER_READ_ONLY
        and principal.role == Role.VIEWER.value
        and request.method not in READ_ONLY_METHODS
    ):
        raise Forbidden("Viewers have read-only access")

    request.state.principal = principal
    return principal
