"""Security utilities for bearer API keys."""

import secrets

from agentcrm.core.errors import Forbidden, Unauthenticated


BEARER_SCHEME = "bearer"
API_KEY_BYTES = 32


def extract_bearer_token(authorization: str | None) -> str:
    """
    Pull the credential out of an Authorization header value.

    Raises:
        Unauthenticated: header absent
        Forbidden: header present but not ``Bearer <token>``
    """
    if authorization is None:
        raise Unauthenticated()
    scheme, _, token = authorization.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != BEARER_SCHEME or not token or " " in token:
        raise Forbidden()
    return token


def generate_api_key() -> str:
    """Create a new random API key (URL-safe, 43 chars)."""
    return secrets.token_urlsafe(API_KEY_BYTES)
