"""Business logic layer."""

from .repo_service import RepoService, is_valid_identifier, normalize_repo_name

__all__ = ["RepoService", "is_valid_identifier", "normalize_repo_name"]
