"""
Repo Store - persistence contract for repo records and its MongoDB implementation.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

import pymongo
from bson import ObjectId
from pymongo.database import Database
from pymongo.errors import DuplicateKeyError

from repo_service.entities.repo import Repo
from repo_service.exceptions import ConflictError, NotFoundError

from .base import BaseRepository

logger = logging.getLogger(__name__)


class RepoStore(ABC):
    """
    Record store for repos.

    Every operation takes ``timeout``, the caller's remaining deadline in
    seconds (``None`` for no deadline), and issues exactly one store call.
    """

    @abstractmethod
    def find_by_id(self, repo_id: str, timeout: Optional[float] = None) -> Repo:
        """Return the repo with this id.

        Raises:
            InvalidArgumentError: ``repo_id`` is not a valid ObjectId string.
            NotFoundError: no repo has this id.
        """

    @abstractmethod
    def find_by_name(self, name: str, timeout: Optional[float] = None) -> Repo:
        """Return the repo with this exact name, or raise NotFoundError."""

    @abstractmethod
    def find_all_by_owner(
        self, owner_id: str, page: int, page_size: int, timeout: Optional[float] = None
    ) -> List[Repo]:
        """Page through repos owned by ``owner_id`` in natural store order."""

    @abstractmethod
    def find_all_by_name(
        self, name: str, page: int, page_size: int, timeout: Optional[float] = None
    ) -> List[Repo]:
        """Page through repos whose name equals ``name``."""

    @abstractmethod
    def create(self, repo: Repo, timeout: Optional[float] = None) -> Repo:
        """Insert a fully populated repo. Raises ConflictError on duplicates."""

    @abstractmethod
    def update(self, repo: Repo, timeout: Optional[float] = None) -> Repo:
        """Replace the mutable fields of the stored repo. Raises NotFoundError."""

    @abstractmethod
    def delete(self, repo_id: str | ObjectId, timeout: Optional[float] = None) -> None:
        """Remove the repo. Raises NotFoundError when nothing was removed."""


def page_to_skip(page: int, page_size: int) -> int:
    return page * page_size


class MongoRepoStore(BaseRepository[Repo], RepoStore):
    """RepoStore backed by a MongoDB collection."""

    def __init__(self, db: Database, collection_name: str = "repos"):
        super().__init__(db, collection_name, Repo)

    def ensure_indexes(self) -> bool:
        """
        Create the owner lookup index and the unique name index.

        Collections carried over from before names were unique may hold
        duplicates; the unique index is then skipped with a warning and
        ``False`` is returned.
        """
        self.collection.create_index("owner_id", name="owner_id")
        try:
            self.collection.create_index("name", unique=True, name="uniq_name")
        except DuplicateKeyError as exc:
            logger.warning(
                "Skipping unique name index on %s, duplicate names present: %s",
                self.collection.name,
                exc,
            )
            return False
        logger.info("Ensured indexes on %s", self.collection.name)
        return True

    def find_by_id(self, repo_id: str, timeout: Optional[float] = None) -> Repo:
        object_id = self._to_object_id(repo_id)
        with pymongo.timeout(timeout):
            repo = self.find_one({"_id": object_id})
        if repo is None:
            raise NotFoundError(f"Repo {repo_id} not found", identifier=repo_id)
        return repo

    def find_by_name(self, name: str, timeout: Optional[float] = None) -> Repo:
        with pymongo.timeout(timeout):
            repo = self.find_one({"name": name})
        if repo is None:
            raise NotFoundError(f"Repo named {name!r} not found", identifier=name)
        return repo

    def find_all_by_owner(
        self, owner_id: str, page: int, page_size: int, timeout: Optional[float] = None
    ) -> List[Repo]:
        with pymongo.timeout(timeout):
            return self.find_many(
                {"owner_id": owner_id},
                skip=page_to_skip(page, page_size),
                limit=page_size,
            )

    def find_all_by_name(
        self, name: str, page: int, page_size: int, timeout: Optional[float] = None
    ) -> List[Repo]:
        with pymongo.timeout(timeout):
            return self.find_many(
                {"name": name},
                skip=page_to_skip(page, page_size),
                limit=page_size,
            )

    def create(self, repo: Repo, timeout: Optional[float] = None) -> Repo:
        try:
            with pymongo.timeout(timeout):
                return self.insert_one(repo)
        except DuplicateKeyError as exc:
            raise ConflictError(f"Repo named {repo.name!r} already exists") from exc

    def update(self, repo: Repo, timeout: Optional[float] = None) -> Repo:
        if repo.id is None:
            raise NotFoundError("Repo has no id", identifier=None)
        try:
            with pymongo.timeout(timeout):
                updated = self.update_one(
                    repo.id,
                    {
                        "name": repo.name,
                        "description": repo.description,
                        "updated_at": repo.updated_at,
                    },
                )
        except DuplicateKeyError as exc:
            raise ConflictError(f"Repo named {repo.name!r} already exists") from exc
        if updated is None:
            raise NotFoundError(f"Repo {repo.id} not found", identifier=str(repo.id))
        return updated

    def delete(self, repo_id: str | ObjectId, timeout: Optional[float] = None) -> None:
        object_id = self._to_object_id(repo_id)
        with pymongo.timeout(timeout):
            deleted = self.delete_one(object_id)
        if not deleted:
            raise NotFoundError(f"Repo {repo_id} not found", identifier=str(repo_id))
