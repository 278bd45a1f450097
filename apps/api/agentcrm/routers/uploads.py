"""Protected static file relay for stored attachments."""

from fastapi import APIRouter, Depends
from fastapi.responses import FileResponse

from agentcrm.core.config import Settings
from agentcrm.core.deps import get_current_principal, get_settings
from agentcrm.core.errors import NotFoundError
from agentcrm.services import attachment_service

router = APIRouter(
    prefix="/uploads",
    tags=["uploads"],
    dependencies=[Depends(get_current_principal)],
)


@router.get("/{file_path:path}")
def download_upload(file_path: str, settings: Settings = Depends(get_settings)):
    """
    Serve a stored file.

    Anything that is missing, not a regular file, or resolves outside
    the upload root is a 404.
    """
    path = attachment_service.resolve_upload_path(settings.UPLOAD_ROOT, file_path)
    if path is None:
        raise NotFoundError("File not found")
    return FileResponse(path)
