"""Catch-all for unmatched routes.

Mounted last so that unknown paths still pass the auth gate before
answering 404.
"""

from fastapi import APIRouter, Depends

from agentcrm.core.deps import get_current_principal
from agentcrm.core.errors import NotFoundError

router = APIRouter(include_in_schema=False)

ALL_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE"]


@router.api_route(
    "/{unmatched:path}",
    methods=ALL_METHODS,
    dependencies=[Depends(get_current_principal)],
)
def route_not_found(unmatched: str):
    raise NotFoundError("Route not found")
