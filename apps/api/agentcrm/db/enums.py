"""Enum definitions for application constants."""

from enum import Enum


class Role(str, Enum):
    """
    Principal roles.

    Stored on every principal. Only consulted when
    ENFORCE_VIEWER_READ_ONLY is enabled (viewer = GET only).
    """

    ADMIN = "admin"
    AGENT = "agent"
    VIEWER = "viewer"

    @classmethod
    def has_value(cls, value: str) -> bool:
        """Check if value is a valid role."""
        return value in cls._value2member_map_


class FieldKind(str, Enum):
    """Primitive kinds a resource field can hold."""

    STR = "str"
    INT = "int"
    FLOAT = "float"
    BOOL = "bool"
    LIST = "list"
    DICT = "dict"


class Stamp(str, Enum):
    """Server-managed timestamp behaviour of a field."""

    CREATED = "created"  # set once on insert
    UPDATED = "updated"  # set on insert and whenever stored values change


READ_ONLY_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})
