"""
Tracing Context - Thread-safe context management for request tracing.

Usage:
    # Set context at the start of an RPC
    TracingContext.set(correlation_id="abc-123", rpc_method="GetPrivateRepo")

    # Get context (automatically added to JSONFormatter logs)
    ctx = TracingContext.get()

    # Clear context at the end
    TracingContext.clear()
"""

import uuid
from contextvars import ContextVar
from typing import Dict

# Thread-safe context variables
_correlation_id: ContextVar[str] = ContextVar("correlation_id", default="")
_rpc_method: ContextVar[str] = ContextVar("rpc_method", default="")
_repo_id: ContextVar[str] = ContextVar("repo_id", default="")


class TracingContext:
    """Thread-safe tracing context."""

    @staticmethod
    def set(
        correlation_id: str = "",
        rpc_method: str = "",
        repo_id: str = "",
    ) -> None:
        """Set tracing context for current execution."""
        if correlation_id:
            _correlation_id.set(correlation_id)
        if rpc_method:
            _rpc_method.set(rpc_method)
        if repo_id:
            _repo_id.set(repo_id)

    @staticmethod
    def get() -> Dict[str, str]:
        return {
            "correlation_id": _correlation_id.get(),
            "rpc_method": _rpc_method.get(),
            "repo_id": _repo_id.get(),
        }

    @staticmethod
    def get_correlation_id() -> str:
        return _correlation_id.get()

    @staticmethod
    def clear() -> None:
        _correlation_id.set("")
        _rpc_method.set("")
        _repo_id.set("")

    @staticmethod
    def generate_correlation_id() -> str:
        return str(uuid.uuid4())
