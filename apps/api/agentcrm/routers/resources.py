"""Generic CRUD router built from a ResourceSchema.

Every entity gets the same five endpoints:

    GET    /{resource}          list (plain array, or paginated with ?page=)
    GET    /{resource}/{id}     fetch one
    POST   /{resource}          create -> 201 {"id": ...}
    PUT    /{resource}/{id}     full replace -> {"message": ...}
    DELETE /{resource}/{id}     hard delete -> {"message": ...}

Schemas with an attachment field also accept multipart/form-data on POST
and PUT; an optional ``file`` part is stored under the upload root.
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session
from starlette.datastructures import UploadFile

from agentcrm.core.config import Settings
from agentcrm.core.deps import get_current_principal, get_db, get_settings
from agentcrm.core.errors import StorageError, ValidationError
from agentcrm.schemas.resource import ResourceSchema
from agentcrm.services import attachment_service, resource_service
from agentcrm.utils.pagination import PaginatedResponse, PaginationParams, get_pagination
from agentcrm.utils.request_body import is_multipart, read_json_body

logger = logging.getLogger(__name__)

UPLOAD_FIELD = "file"


async def _read_values(
    request: Request,
    schema: ResourceSchema,
    settings: Settings,
    current: dict[str, Any] | None = None,
) -> tuple[dict[str, Any], str | None]:
    """
    Parse and validate a create/update body.

    Returns (values, stored_path); stored_path is set when a file part was
    saved, and is already written into the attachment field.
    """
    if schema.attachment_field is None or not is_multipart(request):
        payload = await read_json_body(request)
        return schema.validate(payload, current=current), None

    if attachment_service.content_length_exceeds_limit(
        request.headers.get("content-length"),
        max_size_bytes=settings.MAX_UPLOAD_BYTES,
    ):
        max_mb = settings.MAX_UPLOAD_BYTES / (1024 * 1024)
        raise ValidationError(f"File size exceeds {max_mb:.0f} MB limit")

    async with request.form() as form:
        values = schema.validate(schema.coerce_form(form), current=current)
        upload = form.get(UPLOAD_FIELD)
        if not isinstance(upload, UploadFile) or not upload.filename:
            return values, None
        stored = await attachment_service.store_upload(
            settings.UPLOAD_ROOT,
            schema.path,
            upload,
            max_size_bytes=settings.MAX_UPLOAD_BYTES,
        )
    values[schema.attachment_field] = stored
    return values, stored


def _release_attachment(db: Session, settings: Settings, value: str | None) -> None:
    """Purge a stored file no record references any more."""
    if not settings.PURGE_ATTACHMENTS or not attachment_service.is_managed(value):
        return
    if resource_service.attachment_in_use(db, value):
        logger.info("Keeping attachment %s, still referenced", value)
        return
    attachment_service.purge_attachment(settings.UPLOAD_ROOT, value)


def build_resource_router(schema: ResourceSchema) -> APIRouter:
    """Create the router serving one resource schema (all routes protected)."""
    router = APIRouter(
        prefix=f"/{schema.path}",
        tags=[schema.path],
        dependencies=[Depends(get_current_principal)],
    )
    attachment_field = schema.attachment_field

    @router.get("", name=f"list_{schema.table}")
    def list_resources(
        db: Session = Depends(get_db),
        pagination: PaginationParams | None = Depends(get_pagination),
    ):
        items, total = resource_service.list_records(db, schema, pagination)
        if pagination is None:
            return items
        return PaginatedResponse.create(items, total, pagination).to_dict()

    @router.get("/{record_id}", name=f"get_{schema.table}")
    def get_resource(record_id: int, db: Session = Depends(get_db)):
        return resource_service.get_record(db, schema, record_id)

    @router.post("", status_code=201, name=f"create_{schema.table}")
    async def create_resource(
        request: Request,
        db: Session = Depends(get_db),
        settings: Settings = Depends(get_settings),
    ):
        values, stored = await _read_values(request, schema, settings)
        try:
            record = resource_service.create_record(db, schema, values)
        except StorageError:
            if stored:
                attachment_service.purge_attachment(settings.UPLOAD_ROOT, stored)
            raise

        response: dict[str, Any] = {"id": record.id}
        if attachment_field:
            response[attachment_field] = getattr(record, attachment_field)
        return response

    @router.put("/{record_id}", name=f"update_{schema.table}")
    async def update_resource(
        record_id: int,
        request: Request,
        db: Session = Depends(get_db),
        settings: Settings = Depends(get_settings),
    ):
        record = resource_service.load_record(db, schema, record_id)
        current = schema.serialize(record)
        values, stored = await _read_values(request, schema, settings, current=current)
        try:
            resource_service.update_record(db, schema, record, values)
        except StorageError:
            if stored:
                attachment_service.purge_attachment(settings.UPLOAD_ROOT, stored)
            raise

        if attachment_field:
            previous = current.get(attachment_field)
            if previous != values.get(attachment_field):
                _release_attachment(db, settings, previous)
        return {"message": f"{schema.label} updated successfully"}

    @router.delete("/{record_id}", name=f"delete_{schema.table}")
    def delete_resource(
        record_id: int,
        db: Session = Depends(get_db),
        settings: Settings = Depends(get_settings),
    ):
        deleted = resource_service.delete_record(db, schema, record_id)
        if attachment_field:
            _release_attachment(db, settings, deleted.get(attachment_field))
        return {"message": f"{schema.label} deleted successfully"}

    return router
