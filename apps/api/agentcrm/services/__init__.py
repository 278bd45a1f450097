"""Service layer modules."""

from agentcrm.services.principal_service import (
    count_principals,
    delete_principal,
    find_by_key,
    get_principal,
    list_principals,
    register_principal,
)

# Import service modules (not individual functions) for cleaner access
from agentcrm.services import attachment_service
from agentcrm.services import campaign_persona_service
from agentcrm.services import resource_service

__all__ = [
    # Principal service
    "register_principal",
    "find_by_key",
    "get_principal",
    "list_principals",
    "count_principals",
    "delete_principal",
    # Service modules
    "attachment_service",
    "campaign_persona_service",
    "resource_service",
]
