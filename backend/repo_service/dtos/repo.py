"""Repo RPC DTOs.

Field names are camelCase on the wire. Timestamps travel as plain strings.
"""

from typing import List

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RpcModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateRepoRequest(RpcModel):
    name: str = Field(..., min_length=1)
    description: str = ""
    owner_id: str = Field(..., min_length=1)


MAX_PAGE = 1_000_000
MAX_REQUESTED_PAGE_SIZE = 10_000


class IdentifierRequest(RpcModel):
    repo_identifier: str = Field(..., min_length=1)
    # Bounded so page * page_size always fits the int64 skip
    page: int = Field(default=0, ge=0, le=MAX_PAGE)
    # 0 selects the configured default page size; larger values are clamped to MAX_PAGE_SIZE
    page_size: int = Field(default=0, ge=0, le=MAX_REQUESTED_PAGE_SIZE)


class PrivateRepoRequest(RpcModel):
    id: str
    name: str = Field(..., min_length=1)
    description: str = ""
    owner_id: str = ""
    created_at: str = ""
    updated_at: str = ""


class PrivateRepoResponse(RpcModel):
    id: str
    name: str
    description: str
    owner_id: str
    created_at: str
    updated_at: str


class PublicRepoResponse(RpcModel):
    id: str
    name: str
    description: str
    created_at: str
    updated_at: str


class PrivateReposResponse(RpcModel):
    repos: List[PrivateRepoResponse] = Field(default_factory=list)


class PublicReposResponse(RpcModel):
    repos: List[PublicRepoResponse] = Field(default_factory=list)


class EmptyResponse(RpcModel):
    pass


class RpcErrorResponse(RpcModel):
    code: str
    message: str
    correlation_id: str = ""
