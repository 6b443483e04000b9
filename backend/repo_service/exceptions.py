"""Domain exceptions raised by the store adapter and the repo service."""
from __future__ import annotations


class RepoServiceError(Exception):
    """Base exception for repo service failures."""


class InvalidArgumentError(RepoServiceError):
    """Raised when a request argument is malformed, e.g. a bad ObjectId."""


class NotFoundError(RepoServiceError):
    """Raised when no repo matches the lookup."""

    def __init__(self, message: str, identifier: str | None = None):
        super().__init__(message)
        self.identifier = identifier


class ConflictError(RepoServiceError):
    """Raised when a write violates a uniqueness constraint."""


class DeadlineExceededError(RepoServiceError):
    """Raised when the caller's deadline runs out between store calls."""
