"""
Repo Entity - repository metadata owned by a principal.
"""

from pydantic import Field

from repo_service.entities.base import BaseEntity


class Repo(BaseEntity):
    """A repository record in the ``repos`` collection."""

    name: str = Field(..., description="Normalized repository name.")
    owner_id: str = Field(..., description="Identifier of the owning principal.")
    description: str = Field(default="", description="Free-form description.")
