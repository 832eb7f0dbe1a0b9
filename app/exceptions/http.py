"""
Domain exceptions raised by the service layer.

Each carries the HTTP status the API layer reports it with, so routes never
translate errors by hand; the handlers registered in app.main do it.
"""


class AppError(Exception):
    status_code: int = 500

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AppError):
    """Missing or invalid input."""

    status_code = 400


class CredentialError(AppError):
    """Bad login, or a missing/invalid/expired bearer token."""

    status_code = 401


class AuthorizationError(AppError):
    """The caller has no rights on the target resource."""

    status_code = 403


class NotFoundError(AppError):
    status_code = 404


class StorageError(AppError):
    """The persistence layer failed; the write was rolled back."""

    status_code = 500
