"""Synchronous HTTP client for the AgentCRM API.

Used by automation agents and scripts. Every call sends the configured
bearer API key; error responses are raised as ``CRMClientError``
subclasses carrying the HTTP status and the server's ``error`` message.

Example:
    with CRMClient("http://localhost:5000", api_key) as crm:
        contact_id = crm.create("contacts", {"full_name": "Dana Levi"})["id"]
        crm.get("contacts", contact_id)
"""

import json
import logging
from typing import Any, BinaryIO

import httpx

from agentcrm.core.config import settings

logger = logging.getLogger(__name__)


class CRMClientError(Exception):
    """Base error for failed API calls."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(f"{status_code}: {message}")


class Unauthenticated(CRMClientError):
    """401: no credential was sent."""


class Forbidden(CRMClientError):
    """403: credential rejected."""


class ValidationFailed(CRMClientError):
    """400: missing/invalid fields or a duplicate."""


class NotFound(CRMClientError):
    """404: record, file or route does not exist."""


class ServerError(CRMClientError):
    """5xx or any other unexpected status."""


_ERRORS_BY_STATUS: dict[int, type[CRMClientError]] = {
    400: ValidationFailed,
    401: Unauthenticated,
    403: Forbidden,
    404: NotFound,
}


def _raise_for_error(response: httpx.Response) -> None:
    if response.status_code < 400:
        return
    try:
        message = response.json().get("error") or response.reason_phrase
    except (ValueError, AttributeError):
        message = response.text or response.reason_phrase
    error_cls = _ERRORS_BY_STATUS.get(response.status_code, ServerError)
    logger.debug("CRM API error %s: %s", response.status_code, message)
    raise error_cls(response.status_code, message)


class CRMClient:
    """Thin wrapper over ``httpx.Client`` for the CRM's HTTP interface."""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        http: httpx.Client | None = None,
        timeout: float | None = None,
    ):
        self.api_key = api_key if api_key is not None else settings.CRM_API_KEY
        self._owns_http = http is None
        self._http = http or httpx.Client(
            base_url=base_url or settings.CRM_API_URL,
            timeout=timeout or settings.CRM_API_TIMEOUT_SECONDS,
        )

    # ------------------------------------------------------------------
    # Plumbing
    # ------------------------------------------------------------------

    def _headers(self) -> dict[str, str]:
        if not self.api_key:
            return {}
        return {"Authorization": f"Bearer {self.api_key}"}

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        response = self._http.request(method, path, headers=self._headers(), **kwargs)
        _raise_for_error(response)
        return response

    def _send(
        self,
        method: str,
        path: str,
        fields: dict[str, Any],
        file: tuple[str, BinaryIO] | None,
    ) -> Any:
        if file is None:
            return self._request(method, path, json=fields).json()
        # Multipart: form values are text, structured values as JSON
        data = {
            key: _form_value(value)
            for key, value in fields.items()
            if value is not None
        }
        return self._request(method, path, data=data, files={"file": file}).json()

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "CRMClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def status(self) -> dict[str, Any]:
        return self._request("GET", "/status").json()

    def register(self, name: str, email: str, role: str, api_key: str) -> int:
        """Register a principal; returns its id."""
        payload = {"name": name, "email": email, "role": role, "api_key": api_key}
        return self._request("POST", "/users", json=payload).json()["id"]

    def list(
        self,
        resource: str,
        page: int | None = None,
        per_page: int | None = None,
    ) -> Any:
        """
        List a resource.

        Returns a list of records, or the paginated envelope
        ``{items, total, page, per_page, pages}`` when page is given.
        """
        params: dict[str, int] = {}
        if page is not None:
            params["page"] = page
        if per_page is not None:
            params["per_page"] = per_page
        return self._request("GET", f"/{resource}", params=params).json()

    def get(self, resource: str, record_id: int) -> dict[str, Any]:
        return self._request("GET", f"/{resource}/{record_id}").json()

    def create(
        self,
        resource: str,
        fields: dict[str, Any],
        file: tuple[str, BinaryIO] | None = None,
    ) -> dict[str, Any]:
        """Create a record; ``file`` is a (filename, stream) pair for upload resources."""
        return self._send("POST", f"/{resource}", fields, file)

    def update(
        self,
        resource: str,
        record_id: int,
        fields: dict[str, Any],
        file: tuple[str, BinaryIO] | None = None,
    ) -> dict[str, Any]:
        return self._send("PUT", f"/{resource}/{record_id}", fields, file)

    def delete(self, resource: str, record_id: int) -> dict[str, Any]:
        return self._request("DELETE", f"/{resource}/{record_id}").json()

    def download(self, path: str) -> bytes:
        """Fetch a stored attachment by the path saved on its record (``/uploads/...``)."""
        if not path.startswith("/"):
            path = f"/{path}"
        return self._request("GET", path).content


def _form_value(value: Any) -> str:
    if isinstance(value, (dict, list)):
        return json.dumps(value)
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)
