"""Error taxonomy shared by the domain functions, services and storage adapters."""
from __future__ import annotations


class AppError(Exception):
    """Base class for application errors."""

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """A required field is missing or the confirmation does not match."""


class DuplicateUsernameError(AppError):
    pass


class InvalidCredentialsError(AppError):
    pass


class StorageError(AppError):
    """Serialization or storage medium failure; never leaves the store adapter."""
