"""Wire request/response shapes for the RPC surface."""

from .repo import (
    CreateRepoRequest,
    EmptyResponse,
    IdentifierRequest,
    PrivateRepoRequest,
    PrivateRepoResponse,
    PrivateReposResponse,
    PublicRepoResponse,
    PublicReposResponse,
    RpcErrorResponse,
)

__all__ = [
    "CreateRepoRequest",
    "EmptyResponse",
    "IdentifierRequest",
    "PrivateRepoRequest",
    "PrivateRepoResponse",
    "PrivateReposResponse",
    "PublicRepoResponse",
    "PublicReposResponse",
    "RpcErrorResponse",
]
