"""Resource service - table-driven CRUD for every ResourceSchema."""

import logging
from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session, aliased

from agentcrm.core.errors import NotFoundError
from agentcrm.db.base import Base
from agentcrm.db.enums import Stamp
from agentcrm.db.session import storage_guard
from agentcrm.schemas.registry import RESOURCE_SCHEMAS
from agentcrm.schemas.resource import ResourceSchema
from agentcrm.utils.pagination import PaginationParams
from agentcrm.utils.timestamps import utc_now_iso

logger = logging.getLogger(__name__)


# =============================================================================
# Query helpers
# =============================================================================

def _base_select(schema: ResourceSchema) -> Select:
    """SELECT the record plus one labelled column per lookup (LEFT JOIN)."""
    model = schema.model
    stmt = select(model)
    for lookup in schema.lookups:
        target = aliased(lookup.model)
        stmt = stmt.add_columns(getattr(target, lookup.column).label(lookup.name))
        stmt = stmt.outerjoin(target, getattr(model, lookup.via) == target.id)
    return stmt


def _ordering(schema: ResourceSchema) -> tuple:
    column = getattr(schema.model, schema.order_by)
    tiebreak = schema.model.id
    if schema.descending:
        return (column.desc(), tiebreak.desc())
    return (column.asc(), tiebreak.asc())


def _row_to_dict(schema: ResourceSchema, row) -> dict[str, Any]:
    mapping = row._mapping
    lookups = {lookup.name: mapping[lookup.name] for lookup in schema.lookups}
    return schema.serialize(row[0], lookups)


def _not_found(schema: ResourceSchema) -> NotFoundError:
    return NotFoundError(f"{schema.label} not found")


# =============================================================================
# Service Functions
# =============================================================================

def list_records(
    db: Session,
    schema: ResourceSchema,
    pagination: PaginationParams | None = None,
) -> tuple[list[dict[str, Any]], int]:
    """
    List records in the schema's order.

    Returns (items, total). Without pagination every record is returned
    and total is len(items).
    """
    stmt = _base_select(schema).order_by(*_ordering(schema))
    with storage_guard(db, f"list {schema.path}"):
        if pagination is None:
            rows = db.execute(stmt).all()
            total = len(rows)
        else:
            total = db.execute(select(func.count()).select_from(schema.model)).scalar_one()
            rows = db.execute(stmt.offset(pagination.offset).limit(pagination.per_page)).all()
    return [_row_to_dict(schema, row) for row in rows], total


def get_record(db: Session, schema: ResourceSchema, record_id: int) -> dict[str, Any]:
    """Fetch one record (with lookups) or raise NotFoundError."""
    stmt = _base_select(schema).where(schema.model.id == record_id)
    with storage_guard(db, f"get {schema.path}"):
        row = db.execute(stmt).first()
    if row is None:
        raise _not_found(schema)
    return _row_to_dict(schema, row)


def load_record(db: Session, schema: ResourceSchema, record_id: int) -> Base:
    """Fetch the ORM instance for a write, or raise NotFoundError."""
    with storage_guard(db, f"load {schema.path}"):
        record = db.get(schema.model, record_id)
    if record is None:
        raise _not_found(schema)
    return record


def create_record(db: Session, schema: ResourceSchema, values: dict[str, Any]) -> Base:
    """
    Insert a record from validated values.

    Server-stamped fields are set to the current time; the id is assigned
    by the datastore.
    """
    now = utc_now_iso()
    data = dict(values)
    for spec in schema.stamped_fields:
        data[spec.name] = now

    record = schema.model(**data)
    with storage_guard(db, f"create {schema.path}"):
        db.add(record)
        db.commit()
        db.refresh(record)

    logger.info("Created %s id=%s", schema.path, record.id)
    return record


def update_record(
    db: Session,
    schema: ResourceSchema,
    record: Base,
    values: dict[str, Any],
) -> bool:
    """
    Replace a record's client fields with validated values.

    Server-updated stamps only move when a stored value actually changes,
    so replaying the same update leaves the record untouched.

    Returns:
        True if anything was written
    """
    changed = {
        name: value for name, value in values.items()
        if getattr(record, name) != value
    }
    if not changed:
        return False

    now = utc_now_iso()
    with storage_guard(db, f"update {schema.path}"):
        for name, value in changed.items():
            setattr(record, name, value)
        for spec in schema.stamped_fields:
            if spec.stamp is Stamp.UPDATED:
                setattr(record, spec.name, now)
        db.commit()

    logger.info("Updated %s id=%s fields=%s", schema.path, record.id, sorted(changed))
    return True


def delete_record(db: Session, schema: ResourceSchema, record_id: int) -> dict[str, Any]:
    """
    Hard-delete a record.

    Returns a snapshot of the deleted record so callers can clean up
    anything it referenced.
    """
    record = load_record(db, schema, record_id)
    snapshot = schema.serialize(record)
    with storage_guard(db, f"delete {schema.path}"):
        db.delete(record)
        db.commit()

    logger.info("Deleted %s id=%s", schema.path, record_id)
    return snapshot


def attachment_in_use(db: Session, value: str) -> bool:
    """True when any record of any upload resource still holds this attachment path."""
    with storage_guard(db, "check attachment references"):
        for schema in RESOURCE_SCHEMAS:
            if schema.attachment_field is None:
                continue
            column = getattr(schema.model, schema.attachment_field)
            found = db.execute(
                select(schema.model.id).where(column == value).limit(1)
            ).first()
            if found is not None:
                return True
    return False
