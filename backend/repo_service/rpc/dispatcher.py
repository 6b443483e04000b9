"""
Repo RPC Dispatcher - maps the RepoService procedures onto RepoService.

The dispatcher knows nothing about the transport: it takes typed requests
and returns typed responses, raising domain exceptions unchanged.
"""

from __future__ import annotations

import time
from typing import List, Optional

from repo_service.core.tracing import TracingContext
from repo_service.dtos import (
    CreateRepoRequest,
    EmptyResponse,
    IdentifierRequest,
    PrivateRepoRequest,
    PrivateRepoResponse,
    PrivateReposResponse,
    PublicRepoResponse,
    PublicReposResponse,
)
from repo_service.entities.repo import Repo
from repo_service.exceptions import DeadlineExceededError, InvalidArgumentError
from repo_service.services.repo_service import RepoService, is_valid_identifier
from repo_service.utils.datetime import format_timestamp


def _remaining(timeout: Optional[float], started: float) -> Optional[float]:
    """Part of ``timeout`` left since ``started``; raises once it is used up."""
    if timeout is None:
        return None
    remaining = timeout - (time.monotonic() - started)
    if remaining <= 0:
        raise DeadlineExceededError(f"Deadline of {timeout}s exceeded")
    return remaining


def _traced(repo: Repo) -> Repo:
    TracingContext.set(repo_id=str(repo.id))
    return repo


def to_private_response(repo: Repo) -> PrivateRepoResponse:
    return PrivateRepoResponse(
        id=str(repo.id),
        name=repo.name,
        description=repo.description,
        owner_id=repo.owner_id,
        created_at=format_timestamp(repo.created_at),
        updated_at=format_timestamp(repo.updated_at),
    )


def to_public_response(repo: Repo) -> PublicRepoResponse:
    """Public projection: everything except the owner."""
    return PublicRepoResponse(
        id=str(repo.id),
        name=repo.name,
        description=repo.description,
        created_at=format_timestamp(repo.created_at),
        updated_at=format_timestamp(repo.updated_at),
    )


class RepoRpcDispatcher:
    """Exposes RepoService operations as the RepoService procedures."""

    def __init__(self, service: RepoService, default_page_size: int = 20, max_page_size: int = 100):
        self.service = service
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    def _page_size(self, requested: int) -> int:
        if requested <= 0:
            return self.default_page_size
        return min(requested, self.max_page_size)

    def _list(self, request: IdentifierRequest, timeout: Optional[float]) -> List[Repo]:
        return self.service.find_all_by_identifier(
            request.repo_identifier,
            request.page,
            self._page_size(request.page_size),
            timeout=timeout,
        )

    def create_repo(
        self, request: CreateRepoRequest, timeout: Optional[float] = None
    ) -> PrivateRepoResponse:
        repo = self.service.create(
            request.name, request.description, request.owner_id, timeout=timeout
        )
        return to_private_response(_traced(repo))

    def get_private_repo(
        self, request: IdentifierRequest, timeout: Optional[float] = None
    ) -> PrivateRepoResponse:
        repo = _traced(self.service.find_by_identifier(request.repo_identifier, timeout=timeout))
        return to_private_response(repo)

    def get_public_repo(
        self, request: IdentifierRequest, timeout: Optional[float] = None
    ) -> PublicRepoResponse:
        repo = _traced(self.service.find_by_identifier(request.repo_identifier, timeout=timeout))
        return to_public_response(repo)

    def get_private_repos(
        self, request: IdentifierRequest, timeout: Optional[float] = None
    ) -> PrivateReposResponse:
        repos = self._list(request, timeout)
        return PrivateReposResponse(repos=[to_private_response(repo) for repo in repos])

    def get_public_repos(
        self, request: IdentifierRequest, timeout: Optional[float] = None
    ) -> PublicReposResponse:
        repos = self._list(request, timeout)
        return PublicReposResponse(repos=[to_public_response(repo) for repo in repos])

    def update_repo(
        self, request: PrivateRepoRequest, timeout: Optional[float] = None
    ) -> PrivateRepoResponse:
        # ownerId and the timestamps are not writable; the store keeps its own values
        if not is_valid_identifier(request.id):
            raise InvalidArgumentError(f"Invalid repo id: {request.id!r}")
        repo = Repo(
            _id=request.id,
            name=request.name,
            description=request.description,
            owner_id=request.owner_id,
        )
        return to_private_response(_traced(self.service.update(repo, timeout=timeout)))

    def delete_repo(
        self, request: IdentifierRequest, timeout: Optional[float] = None
    ) -> EmptyResponse:
        # Lookup and delete share one deadline
        started = time.monotonic()
        repo = _traced(self.service.find_by_identifier(request.repo_identifier, timeout=timeout))
        self.service.delete(repo, timeout=_remaining(timeout, started))
        return EmptyResponse()
