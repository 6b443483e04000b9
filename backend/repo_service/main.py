"""Service entry point."""
import logging

from repo_service.config import Settings, settings
from repo_service.core.logging import setup_logging
from repo_service.database.mongo import close_client, get_database
from repo_service.repositories.repo_store import MongoRepoStore
from repo_service.rpc.dispatcher import RepoRpcDispatcher
from repo_service.rpc.server import RepoRpcServer
from repo_service.services.repo_service import RepoService

logger = logging.getLogger(__name__)


def build_server(app_settings: Settings = settings) -> RepoRpcServer:
    """Wire store, service and dispatcher into a server bound to the configured address."""
    store = MongoRepoStore(get_database(), app_settings.MONGODB_REPO_COLLECTION)
    if app_settings.MONGODB_ENSURE_INDEXES:
        store.ensure_indexes()

    dispatcher = RepoRpcDispatcher(
        RepoService(store),
        default_page_size=app_settings.DEFAULT_PAGE_SIZE,
        max_page_size=app_settings.MAX_PAGE_SIZE,
    )
    return RepoRpcServer(
        dispatcher,
        host=app_settings.RPC_HOST,
        port=app_settings.RPC_PORT,
        app_settings=app_settings,
    )


def main() -> None:
    setup_logging(logging.DEBUG if settings.DEBUG else logging.INFO)
    server = build_server()
    try:
        server.serve()
    finally:
        close_client()


if __name__ == "__main__":
    main()
