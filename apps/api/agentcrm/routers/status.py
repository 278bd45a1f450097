"""Liveness endpoint (public)."""

from fastapi import APIRouter

router = APIRouter(tags=["status"])

STATUS_MESSAGE = "CRM server is running"


@router.get("/status")
def status():
    """Report that the server is up. Requires no credential."""
    return {"status": STATUS_MESSAGE}
