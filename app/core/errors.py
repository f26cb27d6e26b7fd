"""Application error taxonomy. Each error maps to one HTTP status in app.main."""

from app.repositories.errors import StorageError, StorageErrorKind


class AppError(Exception):
    """Base for client-visible errors; message is safe to return in the response body."""

    status_code: int = 500
    default_message: str = "Internal server error."

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed or missing input the client can correct."""

    status_code = 400
    default_message = "Invalid request."


class Unauthenticated(AppError):
    """Missing, invalid or expired credentials. Never says which."""

    status_code = 401
    default_message = "Not authenticated."


class Forbidden(AppError):
    status_code = 403
    default_message = "Access denied."


class NotFound(AppError):
    status_code = 404
    default_message = "Not found."


class Conflict(AppError):
    status_code = 409
    default_message = "Value already in use."


class InternalError(AppError):
    status_code = 500


def to_app_error(err: StorageError) -> AppError:
    """Map a storage error kind onto the client-facing taxonomy. Internal detail is dropped."""
    if err.kind is StorageErrorKind.NOT_FOUND:
        return NotFound(f"{err.entity.capitalize()} not found.")
    if err.kind is StorageErrorKind.CONFLICT:
        if err.field:
            return Conflict(f"{err.field} is already in use.")
        return Conflict()
    return InternalError()
