from .http import AppError, AuthorizationError, CredentialError, NotFoundError, StorageError, ValidationError

__all__ = ["AppError", "AuthorizationError", "CredentialError", "NotFoundError", "StorageError", "ValidationError"]
