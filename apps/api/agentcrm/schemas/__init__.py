"""Pydantic schemas and resource descriptors for API request/response models."""

from agentcrm.schemas.principal import PrincipalCreate, PrincipalCreated, PrincipalRead
from agentcrm.schemas.resource import FieldSpec, Lookup, ResourceSchema
from agentcrm.schemas.registry import RESOURCE_SCHEMAS, SCHEMAS_BY_PATH

__all__ = [
    "FieldSpec",
    "Lookup",
    "PrincipalCreate",
    "PrincipalCreated",
    "PrincipalRead",
    "RESOURCE_SCHEMAS",
    "ResourceSchema",
    "SCHEMAS_BY_PATH",
]
