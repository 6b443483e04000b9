"""RPC surface: transport-independent dispatcher plus the HTTP/JSON transport."""

from .dispatcher import RepoRpcDispatcher
from .server import RepoRpcServer, create_app

__all__ = ["RepoRpcDispatcher", "RepoRpcServer", "create_app"]
