"""Principal-related Pydantic schemas."""

from pydantic import BaseModel, Field, field_validator

from agentcrm.db.enums import Role
from agentcrm.utils.normalization import normalize_email, normalize_name


class PrincipalCreate(BaseModel):
    """Request schema for registering a principal (public endpoint)."""

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=1, max_length=255)
    role: str = Field(..., min_length=1)
    api_key: str = Field(..., min_length=1, max_length=255)

    model_config = {"str_strip_whitespace": True}

    @field_validator("name")
    @classmethod
    def collapse_name(cls, value: str) -> str:
        return normalize_name(value) or value

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        normalized = normalize_email(value)
        if not normalized or "@" not in normalized:
            raise ValueError("email must be a valid address")
        return normalized

    @field_validator("role")
    @classmethod
    def check_role(cls, value: str) -> str:
        role = value.lower()
        if not Role.has_value(role):
            allowed = ", ".join(r.value for r in Role)
            raise ValueError(f"role must be one of: {allowed}")
        return role


class PrincipalRead(BaseModel):
    """Response schema for a principal (admin listing includes the key)."""

    id: int
    name: str
    email: str
    role: str
    api_key: str

    model_config = {"from_attributes": True}


class PrincipalCreated(BaseModel):
    id: int
