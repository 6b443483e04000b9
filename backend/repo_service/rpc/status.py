"""Status codes for RPC error responses.

Maps domain and driver exceptions to a status code and the HTTP status the
transport answers with.
"""

from enum import Enum
from typing import Tuple

from pymongo.errors import ConnectionFailure, PyMongoError, ServerSelectionTimeoutError

from repo_service.exceptions import (
    ConflictError,
    DeadlineExceededError,
    InvalidArgumentError,
    NotFoundError,
)


class RpcStatus(str, Enum):
    """Standardized status codes for RPC responses."""

    INVALID_ARGUMENT = "INVALID_ARGUMENT"
    NOT_FOUND = "NOT_FOUND"
    ALREADY_EXISTS = "ALREADY_EXISTS"
    DEADLINE_EXCEEDED = "DEADLINE_EXCEEDED"
    UNAVAILABLE = "UNAVAILABLE"
    INTERNAL = "INTERNAL"


STATUS_TO_HTTP: dict[RpcStatus, int] = {
    RpcStatus.INVALID_ARGUMENT: 400,
    RpcStatus.NOT_FOUND: 404,
    RpcStatus.ALREADY_EXISTS: 409,
    RpcStatus.DEADLINE_EXCEEDED: 504,
    RpcStatus.UNAVAILABLE: 503,
    RpcStatus.INTERNAL: 500,
}


def status_for_exception(exc: BaseException) -> RpcStatus:
    """Get RpcStatus for an exception raised while serving an RPC."""
    if isinstance(exc, InvalidArgumentError):
        return RpcStatus.INVALID_ARGUMENT
    if isinstance(exc, NotFoundError):
        return RpcStatus.NOT_FOUND
    if isinstance(exc, ConflictError):
        return RpcStatus.ALREADY_EXISTS
    if isinstance(exc, DeadlineExceededError):
        return RpcStatus.DEADLINE_EXCEEDED
    if isinstance(exc, ServerSelectionTimeoutError):
        return RpcStatus.UNAVAILABLE
    if isinstance(exc, PyMongoError) and exc.timeout:
        return RpcStatus.DEADLINE_EXCEEDED
    if isinstance(exc, ConnectionFailure):
        return RpcStatus.UNAVAILABLE
    return RpcStatus.INTERNAL


def http_status_for_exception(exc: BaseException) -> Tuple[RpcStatus, int]:
    status = status_for_exception(exc)
    return status, STATUS_TO_HTTP[status]
