"""Resource schema descriptors.

A ``ResourceSchema`` describes one entity table: its URL path, ORM model,
typed fields, list ordering, read-side lookups and (optionally) the field
holding an uploaded attachment. The generic router, the resource service and the
request validation are all driven from these descriptors.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from functools import cached_property
from typing import Any, Callable, Mapping

from pydantic import BaseModel, ConfigDict, Field, create_model
from pydantic import ValidationError as PydanticValidationError

from agentcrm.core.errors import ValidationError
from agentcrm.db.base import Base
from agentcrm.db.enums import FieldKind, Stamp


_PYTHON_TYPES: dict[FieldKind, type] = {
    FieldKind.STR: str,
    FieldKind.INT: int,
    FieldKind.FLOAT: float,
    FieldKind.BOOL: bool,
    FieldKind.LIST: list,
    FieldKind.DICT: dict,
}


@dataclass(frozen=True)
class FieldSpec:
    """One client-visible column of a resource."""

    name: str
    kind: FieldKind = FieldKind.STR
    required: bool = False
    default: Any = None
    default_factory: Callable[[], Any] | None = None
    stamp: Stamp | None = None

    @property
    def is_input(self) -> bool:
        """Server-stamped fields are never accepted from clients."""
        return self.stamp is None

    @property
    def is_structured(self) -> bool:
        return self.kind in (FieldKind.LIST, FieldKind.DICT)

    def default_value(self) -> Any:
        if self.default_factory is not None:
            return self.default_factory()
        if self.default is not None:
            return self.default
        if self.kind is FieldKind.LIST:
            return []
        if self.kind is FieldKind.DICT:
            return {}
        return None


@dataclass(frozen=True)
class Lookup:
    """Display-only value joined from another table (LEFT JOIN on ``via`` = target.id)."""

    name: str
    via: str
    model: type[Base]
    column: str


@dataclass(frozen=True)
class ResourceSchema:
    path: str
    model: type[Base]
    label: str
    fields: tuple[FieldSpec, ...]
    order_by: str = "id"
    descending: bool = False
    lookups: tuple[Lookup, ...] = ()
    attachment_field: str | None = None

    @property
    def table(self) -> str:
        return self.model.__tablename__

    @property
    def input_fields(self) -> tuple[FieldSpec, ...]:
        return tuple(f for f in self.fields if f.is_input)

    @property
    def required_fields(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.fields if f.required)

    @property
    def stamped_fields(self) -> tuple[FieldSpec, ...]:
        return tuple(f for f in self.fields if f.stamp is not None)

    def get_field(self, name: str) -> FieldSpec:
        for spec in self.fields:
            if spec.name == name:
                return spec
        raise KeyError(name)

    @cached_property
    def input_model(self) -> type[BaseModel]:
        """Pydantic model validating create/update bodies."""
        definitions: dict[str, Any] = {}
        for spec in self.input_fields:
            python_type = _PYTHON_TYPES[spec.kind]
            if spec.required:
                if spec.kind is FieldKind.STR:
                    definitions[spec.name] = (python_type, Field(..., min_length=1))
                else:
                    definitions[spec.name] = (python_type, ...)
            else:
                definitions[spec.name] = (python_type | None, None)
        model_name = "".join(part.title() for part in self.path.split("-")) + "Input"
        return create_model(
            model_name,
            __config__=ConfigDict(
                extra="ignore",
                coerce_numbers_to_str=True,
            ),
            **definitions,
        )

    def validate(self, payload: Any, current: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """
        Validate a request body against this schema.

        Returns a dict holding every input field: required fields as given,
        optional fields as given or their default. When ``current`` (the
        stored values) is given, omitted time-defaulted fields keep their
        stored value instead of moving to "now". Raises ValidationError.
        """
        if not isinstance(payload, Mapping):
            raise ValidationError("Request body must be a JSON object")
        missing = [name for name in self.required_fields if _is_blank(payload.get(name))]
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")
        try:
            parsed = self.input_model.model_validate(dict(payload))
        except PydanticValidationError as exc:
            raise ValidationError(_format_validation_error(exc)) from exc

        values = parsed.model_dump()
        for spec in self.input_fields:
            if values.get(spec.name) is not None:
                continue
            if current is not None and spec.default_factory is not None and current.get(spec.name) is not None:
                values[spec.name] = current[spec.name]
            else:
                values[spec.name] = spec.default_value()
        return values

    def coerce_form(self, form: Mapping[str, Any]) -> dict[str, Any]:
        """
        Turn multipart form values (all strings) into a JSON-like payload.

        Blank non-text values become null; structured fields are parsed
        from their JSON text.
        """
        payload: dict[str, Any] = {}
        for spec in self.input_fields:
            if spec.name not in form:
                continue
            raw = form[spec.name]
            if not isinstance(raw, str):
                continue
            if spec.kind is not FieldKind.STR and not raw.strip():
                payload[spec.name] = None
            elif spec.is_structured:
                try:
                    payload[spec.name] = json.loads(raw)
                except ValueError as exc:
                    raise ValidationError(f"Field '{spec.name}' must be valid JSON") from exc
            else:
                payload[spec.name] = raw
        return payload

    def serialize(self, record: Base, lookups: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """Render a record (plus joined lookup values) as a JSON-ready dict."""
        data: dict[str, Any] = {"id": record.id}
        for spec in self.fields:
            data[spec.name] = getattr(record, spec.name)
        for lookup in self.lookups:
            data[lookup.name] = (lookups or {}).get(lookup.name)
        return data


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _format_validation_error(exc: PydanticValidationError) -> str:
    missing: list[str] = []
    for error in exc.errors():
        loc = ".".join(str(part) for part in error.get("loc", ()))
        if error.get("type") in ("missing", "string_too_short"):
            missing.append(loc)
    if missing:
        return f"Missing required fields: {', '.join(missing)}"
    first = exc.errors()[0]
    loc = ".".join(str(part) for part in first.get("loc", ()))
    return f"Invalid value for '{loc}': {first.get('msg', 'invalid')}"
