"""Domain errors raised by the service layer.

Each error carries the HTTP status and machine-readable code it is reported
with; ``gifthub.main`` renders them as ``{"error": code, "message": ...}``.
"""


class GiftHubError(Exception):
    status_code = 500
    code = "internal_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(GiftHubError):
    """Malformed or missing input."""

    status_code = 400
    code = "validation_error"


class AuthError(GiftHubError):
    """Missing, invalid or expired credential, or one pointing at a deleted record."""

    status_code = 401
    code = "auth_error"


class ForbiddenError(GiftHubError):
    """Authenticated, but not allowed to touch this record."""

    status_code = 403
    code = "forbidden"


class NotFoundError(GiftHubError):
    status_code = 404
    code = "not_found"


class ConflictError(GiftHubError):
    """A state precondition was violated, e.g. the gift is reserved by someone else."""

    status_code = 409
    code = "conflict"
