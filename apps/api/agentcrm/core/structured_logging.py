"""Structured logging helpers (secret-safe)."""

import logging
from typing import Any

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once at startup."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
    )


def build_log_context(
    *,
    principal_id: int | None = None,
    role: str | None = None,
    request_id: str | None = None,
    route: str | None = None,
    method: str | None = None,
    status_code: int | None = None,
) -> dict[str, Any]:
    """Return a log context dict. Never include API keys here."""
    context: dict[str, Any] = {}
    if principal_id is not None:
        context["principal_id"] = principal_id
    if role:
        context["role"] = role
    if request_id:
        context["request_id"] = request_id
    if route:
        context["route"] = route
    if method:
        context["method"] = method
    if status_code is not None:
        context["status_code"] = status_code
    return context
