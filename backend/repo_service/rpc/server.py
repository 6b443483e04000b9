"""
RPC transport - serves RepoRpcDispatcher as JSON procedures over HTTP.

Each procedure is ``POST /repo.RepoService/<Method>``. Handlers are plain
``def`` functions, so FastAPI runs every call on its own worker thread.
Errors are wrapped in an ``RpcErrorResponse`` envelope.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Optional

import uvicorn
from fastapi import APIRouter, Depends, FastAPI, Header, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from repo_service.api import health
from repo_service.config import Settings, settings as default_settings
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
    RpcErrorResponse,
)
from repo_service.exceptions import RepoServiceError
from repo_service.rpc.dispatcher import RepoRpcDispatcher
from repo_service.rpc.status import STATUS_TO_HTTP, RpcStatus, http_status_for_exception

logger = logging.getLogger(__name__)

SERVICE_PREFIX = "/repo.RepoService"
REQUEST_ID_HEADER = "X-Request-ID"


def build_rpc_router(
    dispatcher: RepoRpcDispatcher, default_timeout: Optional[float] = None
) -> APIRouter:
    router = APIRouter(prefix=SERVICE_PREFIX, tags=["RepoService"])

    def get_timeout(x_rpc_timeout: Optional[float] = Header(default=None, gt=0)) -> Optional[float]:
        """Caller deadline in seconds, forwarded to the store call."""
        return x_rpc_timeout if x_rpc_timeout is not None else default_timeout

    @router.post("/CreateRepo", response_model=PrivateRepoResponse)
    def create_repo(request: CreateRepoRequest, timeout: Optional[float] = Depends(get_timeout)):
        return dispatcher.create_repo(request, timeout=timeout)

    @router.post("/GetPrivateRepo", response_model=PrivateRepoResponse)
    def get_private_repo(request: IdentifierRequest, timeout: Optional[float] = Depends(get_timeout)):
        return dispatcher.get_private_repo(request, timeout=timeout)

    @router.post("/GetPublicRepo", response_model=PublicRepoResponse)
    def get_public_repo(request: IdentifierRequest, timeout: Optional[float] = Depends(get_timeout)):
        return dispatcher.get_public_repo(request, timeout=timeout)

    @router.post("/GetPrivateRepos", response_model=PrivateReposResponse)
    def get_private_repos(request: IdentifierRequest, timeout: Optional[float] = Depends(get_timeout)):
        return dispatcher.get_private_repos(request, timeout=timeout)

    @router.post("/GetPublicRepos", response_model=PublicReposResponse)
    def get_public_repos(request: IdentifierRequest, timeout: Optional[float] = Depends(get_timeout)):
        return dispatcher.get_public_repos(request, timeout=timeout)

    @router.post("/UpdateRepo", response_model=PrivateRepoResponse)
    def update_repo(request: PrivateRepoRequest, timeout: Optional[float] = Depends(get_timeout)):
        return dispatcher.update_repo(request, timeout=timeout)

    @router.post("/DeleteRepo", response_model=EmptyResponse)
    def delete_repo(request: IdentifierRequest, timeout: Optional[float] = Depends(get_timeout)):
        return dispatcher.delete_repo(request, timeout=timeout)

    return router


def _error_response(request: Request, status: RpcStatus, http_status: int, message: str) -> JSONResponse:
    correlation_id = getattr(request.state, "correlation_id", "")
    body = RpcErrorResponse(code=status.value, message=message, correlation_id=correlation_id)
    headers = {REQUEST_ID_HEADER: correlation_id} if correlation_id else None
    return JSONResponse(
        status_code=http_status, content=body.model_dump(by_alias=True), headers=headers
    )


async def _handle_rpc_error(request: Request, exc: Exception) -> JSONResponse:
    status, http_status = http_status_for_exception(exc)
    if http_status >= 500:
        logger.error("RPC %s failed: %s", request.url.path, exc, exc_info=exc)
    else:
        logger.warning("RPC %s rejected (%s): %s", request.url.path, status.value, exc)
    message = "Internal error" if status is RpcStatus.INTERNAL else str(exc)
    return _error_response(request, status, http_status, message)


async def _handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning("RPC %s rejected: invalid request", request.url.path)
    return _error_response(
        request,
        RpcStatus.INVALID_ARGUMENT,
        STATUS_TO_HTTP[RpcStatus.INVALID_ARGUMENT],
        str(exc.errors()),
    )


def create_app(
    dispatcher: RepoRpcDispatcher, app_settings: Settings = default_settings
) -> FastAPI:
    app = FastAPI(
        title=app_settings.APP_NAME,
        description="Repository metadata RPC service",
        version=app_settings.APP_VERSION,
        docs_url="/docs",
        redoc_url=None,
    )

    @app.middleware("http")
    async def tracing_middleware(request: Request, call_next):
        correlation_id = request.headers.get(REQUEST_ID_HEADER) or TracingContext.generate_correlation_id()
        request.state.correlation_id = correlation_id
        rpc_method = request.url.path.rsplit("/", 1)[-1]
        TracingContext.set(correlation_id=correlation_id, rpc_method=rpc_method)
        try:
            response = await call_next(request)
        finally:
            TracingContext.clear()
        response.headers[REQUEST_ID_HEADER] = correlation_id
        return response

    app.add_exception_handler(RepoServiceError, _handle_rpc_error)
    app.add_exception_handler(PyMongoError, _handle_rpc_error)
    app.add_exception_handler(RequestValidationError, _handle_validation_error)
    # Fallback: INTERNAL envelope
    app.add_exception_handler(Exception, _handle_rpc_error)

    app.include_router(
        build_rpc_router(dispatcher, default_timeout=app_settings.RPC_DEFAULT_TIMEOUT_SECONDS)
    )
    app.include_router(health.router, tags=["Health"])
    return app


class RepoRpcServer:
    """
    Owns one FastAPI app and the uvicorn server running it.

    ``serve()`` blocks the calling thread. ``start()``/``stop()`` run the
    server on a background thread, for embedding and tests.
    """

    def __init__(
        self,
        dispatcher: RepoRpcDispatcher,
        host: str = default_settings.RPC_HOST,
        port: int = default_settings.RPC_PORT,
        app_settings: Settings = default_settings,
    ):
        self.host = host
        self.port = port
        self.app = create_app(dispatcher, app_settings)
        self._server: Optional[uvicorn.Server] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def is_running(self) -> bool:
        return self._server is not None and self._server.started

    def _build_server(self) -> uvicorn.Server:
        config = uvicorn.Config(self.app, host=self.host, port=self.port, log_config=None)
        return uvicorn.Server(config)

    def serve(self) -> None:
        """Run in the foreground until interrupted."""
        logger.info("RepoService listening on %s:%s", self.host, self.port)
        self._server = self._build_server()
        try:
            self._server.run()
        finally:
            self._server = None

    def start(self, startup_timeout: float = 10.0) -> None:
        if self._thread is not None:
            raise RuntimeError("RepoRpcServer already started")
        self._server = self._build_server()
        self._thread = threading.Thread(
            target=self._server.run, name="repo-rpc-server", daemon=True
        )
        self._thread.start()

        deadline = time.monotonic() + startup_timeout
        while not self._server.started:
            if not self._thread.is_alive():
                self._server = None
                self._thread = None
                raise RuntimeError(f"RepoRpcServer failed to start on {self.host}:{self.port}")
            if time.monotonic() > deadline:
                self.stop()
                raise TimeoutError("RepoRpcServer did not start in time")
            time.sleep(0.05)
        logger.info("RepoService started on %s:%s", self.host, self.port)

    def stop(self, timeout: float = 10.0) -> None:
        if self._server is None or self._thread is None:
            return
        self._server.should_exit = True
        self._thread.join(timeout)
        self._server = None
        self._thread = None
        logger.info("RepoService stopped")
