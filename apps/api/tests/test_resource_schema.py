"""Tests for resource schema descriptors and body validation."""
import pytest

from agentcrm.core.errors import ValidationError
from agentcrm.db.enums import Stamp
from agentcrm.schemas.registry import (
    CONTACTS,
    FREELANCERS,
    MARKETING_CAMPAIGNS,
    PROJECTS,
    QUOTES,
    RESOURCE_SCHEMAS,
    SCHEMAS_BY_PATH,
    TASKS,
)


def test_registry_paths_are_unique():
    paths = [schema.path for schema in RESOURCE_SCHEMAS]
    assert len(paths) == len(set(paths)) == 25
    assert SCHEMAS_BY_PATH["persona-library"].table == "persona_library"


def test_every_schema_field_is_a_model_column():
    for schema in RESOURCE_SCHEMAS:
        columns = set(schema.model.__table__.columns.keys())
        for spec in schema.fields:
            assert spec.name in columns, f"{schema.path}.{spec.name}"
        assert schema.order_by in columns


def test_attachment_resources():
    attachments = {s.path: s.attachment_field for s in RESOURCE_SCHEMAS if s.attachment_field}
    assert attachments == {"quotes": "file_url", "payments": "invoice_link"}


def test_validate_requires_required_fields():
    with pytest.raises(ValidationError) as exc:
        CONTACTS.validate({"phone": "123"})
    assert exc.value.message == "Missing required fields: full_name"


def test_validate_treats_null_and_blank_as_missing():
    with pytest.raises(ValidationError):
        CONTACTS.validate({"full_name": None})
    with pytest.raises(ValidationError):
        CONTACTS.validate({"full_name": "   "})


def test_validate_rejects_non_object_body():
    with pytest.raises(ValidationError):
        CONTACTS.validate(["full_name"])


def test_validate_rejects_mistyped_field():
    with pytest.raises(ValidationError) as exc:
        QUOTES.validate({"amount": "a lot"})
    assert "amount" in exc.value.message


def test_validate_ignores_unknown_fields():
    values = CONTACTS.validate({"full_name": "Dana", "favourite_colour": "teal"})
    assert "favourite_colour" not in values


def test_validate_fills_every_input_field():
    values = CONTACTS.validate({"full_name": "Dana"})
    assert values == {
        "full_name": "Dana",
        "phone": None,
        "email": None,
        "status": None,
        "notes": None,
    }


def test_validate_applies_defaults():
    values = FREELANCERS.validate({"name": "Noa"})
    assert values["is_available"] is True
    assert values["current_load"] == 0
    assert values["rating"] == 0

    values = PROJECTS.validate({"title": "Site"})
    assert values["status"] == "new"
    assert values["stage"] == "intake"
    assert values["tags"] == []
    assert values["start_date"].endswith("Z")


def test_validate_keeps_current_time_defaults_on_update():
    current = {"start_date": "2024-01-01T00:00:00.000Z", "last_update": None}
    values = PROJECTS.validate({"title": "Site"}, current=current)
    assert values["start_date"] == "2024-01-01T00:00:00.000Z"
    assert values["last_update"] is not None


def test_server_stamped_fields_are_not_inputs():
    names = {spec.name for spec in TASKS.input_fields}
    assert "created_at" not in names and "updated_at" not in names
    stamps = {spec.name: spec.stamp for spec in TASKS.stamped_fields}
    assert stamps == {"created_at": Stamp.CREATED, "updated_at": Stamp.UPDATED}

    values = TASKS.validate({"title": "Call", "created_at": "1999-01-01"})
    assert "created_at" not in values


def test_coerce_form_parses_structured_and_blank_values():
    payload = PROJECTS.coerce_form(
        {"title": "Site", "contact_id": "", "tags": '["web", "seo"]', "ignored": "x"}
    )
    assert payload == {"title": "Site", "contact_id": None, "tags": ["web", "seo"]}
    values = PROJECTS.validate(payload)
    assert values["tags"] == ["web", "seo"]


def test_coerce_form_rejects_invalid_json():
    with pytest.raises(ValidationError):
        MARKETING_CAMPAIGNS.coerce_form({"name": "Spring", "results_json": "{not json"})


def test_form_strings_are_coerced_to_numbers():
    values = QUOTES.validate(QUOTES.coerce_form({"contact_id": "7", "amount": "99.5"}))
    assert values["contact_id"] == 7
    assert values["amount"] == 99.5
