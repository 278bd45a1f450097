"""Error taxonomy shared by the API, repositories and services.

Every error maps to exactly one HTTP status and is rendered as
``{"error": message}`` by the handlers registered in ``agentcrm.main``.
"""


class CRMError(Exception):
    """Base exception for request-terminating errors."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(CRMError):
    """No credential was presented."""

    status_code = 401
    default_message = "Missing Authorization header"


class Forbidden(CRMError):
    """A credential was presented but is not valid for this request."""

    status_code = 403
    default_message = "Invalid API Key"


class ValidationError(CRMError):
    """A required field is missing or a field is malformed."""

    status_code = 400
    default_message = "Missing required fields"


class DuplicateError(CRMError):
    """A unique constraint would be violated."""

    status_code = 400
    default_message = "Record already exists"


class NotFoundError(CRMError):
    """The operation targets an id (or path) that does not exist."""

    status_code = 404
    default_message = "Not found"


class StorageError(CRMError):
    """Datastore or filesystem failure.

    The message given to the constructor is for the server log only; clients
    always see the generic ``default_message``.
    """

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        super().__init__(message)
        self.detail = self.message
        self.message = self.default_message
