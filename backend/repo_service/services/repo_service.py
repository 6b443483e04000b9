"""
Repo Service - Business rules for repo records.

Two rules live here:
- Name normalization on create (spaces to hyphens, lowercase, collapse hyphen runs)
- Identifier disambiguation: a 24-hex ObjectId string is treated as an id,
  anything else as a name
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from bson import ObjectId

from repo_service.entities.base import is_object_id_hex
from repo_service.entities.repo import Repo
from repo_service.repositories.repo_store import RepoStore
from repo_service.utils.datetime import utc_now

logger = logging.getLogger(__name__)

_HYPHEN_RUN = re.compile(r"-{2,}")


def normalize_repo_name(name: str) -> str:
    """
    Normalize a repo name.

    Only literal spaces become hyphens; tabs and other whitespace are kept.
    The result is idempotent under normalization.
    """
    name = name.replace(" ", "-").lower()
    return _HYPHEN_RUN.sub("-", name)


def is_valid_identifier(value: str) -> bool:
    """True when ``value`` is exactly 24 hex characters, i.e. an ObjectId string."""
    return is_object_id_hex(value)


class RepoService:
    """Service for creating, looking up, updating and deleting repos."""

    def __init__(self, store: RepoStore):
        self.store = store

    def create(
        self,
        name: str,
        description: str,
        owner_id: str,
        timeout: Optional[float] = None,
    ) -> Repo:
        now = utc_now()
        repo = Repo(
            _id=ObjectId(),
            name=normalize_repo_name(name),
            description=description,
            owner_id=owner_id,
            created_at=now,
            updated_at=now,
        )
        created = self.store.create(repo, timeout=timeout)
        logger.info("Created repo %s (%s) for owner %s", created.id, created.name, owner_id)
        return created

    def find_by_id(self, repo_id: str, timeout: Optional[float] = None) -> Repo:
        return self.store.find_by_id(repo_id, timeout=timeout)

    def find_by_name(self, name: str, timeout: Optional[float] = None) -> Repo:
        return self.store.find_by_name(name, timeout=timeout)

    def find_by_identifier(self, identifier: str, timeout: Optional[float] = None) -> Repo:
        """Look up a single repo by id when ``identifier`` parses as one, else by name."""
        if is_valid_identifier(identifier):
            return self.store.find_by_id(identifier, timeout=timeout)
        return self.store.find_by_name(identifier, timeout=timeout)

    def find_all_by_identifier(
        self,
        identifier: str,
        page: int,
        page_size: int,
        timeout: Optional[float] = None,
    ) -> List[Repo]:
        """
        List repos for an owner id or a name.

        A valid ObjectId string is read as an owner id. A repo whose name is
        itself 24 hex characters can therefore not be listed by name.
        """
        if is_valid_identifier(identifier):
            return self.store.find_all_by_owner(identifier, page, page_size, timeout=timeout)
        return self.store.find_all_by_name(identifier, page, page_size, timeout=timeout)

    def update(self, repo: Repo, timeout: Optional[float] = None) -> Repo:
        repo.updated_at = utc_now()
        updated = self.store.update(repo, timeout=timeout)
        logger.info("Updated repo %s", updated.id)
        return updated

    def delete(self, repo: Repo, timeout: Optional[float] = None) -> None:
        self.store.delete(repo.id, timeout=timeout)
        logger.info("Deleted repo %s (%s)", repo.id, repo.name)
