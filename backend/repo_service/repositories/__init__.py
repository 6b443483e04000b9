"""Repository layer for database operations"""

from .base import BaseRepository
from .repo_store import MongoRepoStore, RepoStore

__all__ = [
    "BaseRepository",
    "MongoRepoStore",
    "RepoStore",
]
