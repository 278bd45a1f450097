"""Attachment service - local file storage for uploaded quote/invoice files.

Files live under ``UPLOAD_ROOT/<resource>/<epoch_ms>-<basename>`` and records
reference them by the public path ``/uploads/<resource>/<epoch_ms>-<basename>``.
A name already taken gets a random hex segment before the basename, so
files are never overwritten.
Anything else in an attachment field (e.g. an external link) is left alone.
"""

import logging
import os
import re
import secrets
import shutil
from os import SEEK_END
from pathlib import Path

from fastapi import UploadFile
from starlette.concurrency import run_in_threadpool

from agentcrm.core.errors import StorageError, ValidationError
from agentcrm.utils.timestamps import epoch_millis

logger = logging.getLogger(__name__)

PUBLIC_PREFIX = "/uploads/"
MULTIPART_OVERHEAD_BYTES = 64 * 1024
MAX_NAME_ATTEMPTS = 5

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


# =============================================================================
# Size checks
# =============================================================================

def content_length_exceeds_limit(
    content_length_header: str | None,
    *,
    max_size_bytes: int,
    overhead_bytes: int = MULTIPART_OVERHEAD_BYTES,
) -> bool:
    """Return True when Content-Length clearly exceeds the allowed file size."""
    if not content_length_header:
        return False
    try:
        content_length = int(content_length_header)
    except (TypeError, ValueError):
        return False
    return content_length > (max_size_bytes + overhead_bytes)


async def get_upload_file_size(file: UploadFile) -> int:
    """Read size from the underlying file object without loading into memory."""

    def _get_size() -> int:
        stream = file.file
        original_pos = stream.tell()
        try:
            stream.seek(0, SEEK_END)
            return stream.tell()
        finally:
            stream.seek(original_pos)

    return await run_in_threadpool(_get_size)


# =============================================================================
# Paths
# =============================================================================

def safe_basename(filename: str | None) -> str:
    """Last path component of a client filename, reduced to safe characters."""
    name = (filename or "").replace("\\", "/").rsplit("/", 1)[-1]
    name = _UNSAFE_CHARS.sub("_", name).strip("._")
    return name or "upload"


def public_path(resource: str, stored_name: str) -> str:
    return f"{PUBLIC_PREFIX}{resource}/{stored_name}"


def resolve_upload_path(upload_root: str | Path, relative: str) -> Path | None:
    """
    Map a path below /uploads/ to a file on disk.

    Returns None when the path escapes the upload root or is not a file.
    """
    root = Path(upload_root).resolve()
    candidate = (root / relative.lstrip("/")).resolve()
    if candidate != root and root not in candidate.parents:
        return None
    if not candidate.is_file():
        return None
    return candidate


# =============================================================================
# Service Functions
# =============================================================================

async def store_upload(
    upload_root: str | Path,
    resource: str,
    file: UploadFile,
    *,
    max_size_bytes: int,
) -> str:
    """
    Persist an uploaded file and return its public path.

    Raises:
        ValidationError: file is larger than max_size_bytes
        StorageError: the file could not be written
    """
    size = await get_upload_file_size(file)
    if size > max_size_bytes:
        max_mb = max_size_bytes / (1024 * 1024)
        raise ValidationError(f"File size exceeds {max_mb:.0f} MB limit")

    basename = safe_basename(file.filename)
    directory = Path(upload_root) / resource

    def _write() -> str:
        directory.mkdir(parents=True, exist_ok=True)
        stored_name = f"{epoch_millis()}-{basename}"
        for _ in range(MAX_NAME_ATTEMPTS):
            try:
                out = open(directory / stored_name, "xb")
            except FileExistsError:
                stored_name = f"{epoch_millis()}-{secrets.token_hex(4)}-{basename}"
                continue
            with out:
                file.file.seek(0)
                shutil.copyfileobj(file.file, out)
            return stored_name
        raise FileExistsError(f"no free name for {basename} in {directory}")

    try:
        stored_name = await run_in_threadpool(_write)
    except OSError as exc:
        logger.exception("Failed to store upload for %s", resource)
        raise StorageError(f"store upload {resource}/{basename}: {exc}") from exc

    logger.info("Stored upload %s/%s (%d bytes)", resource, stored_name, size)
    return public_path(resource, stored_name)


def is_managed(value: str | None) -> bool:
    """True when an attachment value points into our own upload area."""
    return bool(value) and value.startswith(PUBLIC_PREFIX)


def purge_attachment(upload_root: str | Path, value: str | None) -> bool:
    """
    Remove a stored file previously referenced by an attachment field.

    External links and missing files are ignored. Failures are logged,
    never raised.

    Returns:
        True if a file was removed
    """
    if not is_managed(value):
        return False
    path = resolve_upload_path(upload_root, value[len(PUBLIC_PREFIX):])
    if path is None:
        return False
    try:
        os.remove(path)
    except OSError:
        logger.warning("Could not remove attachment %s", path, exc_info=True)
        return False
    logger.info("Removed attachment %s", path)
    return True
