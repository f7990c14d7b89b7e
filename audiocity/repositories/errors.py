"""Error kinds raised by the repositories."""
from __future__ import annotations


class RepositoryError(Exception):
    """Base class for repository failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(RepositoryError):
    """A required field is missing or has the wrong type. Nothing was changed."""


class NotFoundError(RepositoryError):
    """The entity does not exist or is not visible to the requester."""


class UnauthorizedError(RepositoryError):
    """The entity is visible but the requester may not modify it."""


class ConflictError(RepositoryError):
    """A create operation collided with an existing unique key."""


class StorageError(RepositoryError):
    """The filesystem (or a malformed document) made the operation fail."""

    def __init__(self, message: str, path=None):
        super().__init__(message)
        self.path = path
