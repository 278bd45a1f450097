"""API routers."""

from agentcrm.routers.campaign_personas import router as campaign_personas_router
from agentcrm.routers.fallback import router as fallback_router
from agentcrm.routers.principals import router as principals_router
from agentcrm.routers.resources import build_resource_router
from agentcrm.routers.status import router as status_router
from agentcrm.routers.uploads import router as uploads_router

__all__ = [
    "build_resource_router",
    "campaign_personas_router",
    "fallback_router",
    "principals_router",
    "status_router",
    "uploads_router",
]
