"""Helpers for reading raw request bodies in handlers that parse their own input."""

from typing import Any

from fastapi import Request

from agentcrm.core.errors import ValidationError


async def read_json_body(request: Request) -> Any:
    """
    Decode the JSON request body.

    Raises:
        ValidationError: body is empty or not valid JSON
    """
    try:
        return await request.json()
    except ValueError as exc:
        raise ValidationError("Request body must be valid JSON") from exc


def is_multipart(request: Request) -> bool:
    content_type = request.headers.get("content-type", "")
    return content_type.lower().startswith("multipart/form-data")
