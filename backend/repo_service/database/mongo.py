from __future__ import annotations

"""
MongoDB connection helpers.
"""

import logging
from typing import Generator

from pymongo import MongoClient
from pymongo.database import Database

logger = logging.getLogger(__name__)

_client: MongoClient | None = None


def get_client() -> MongoClient:
    global _client
    if _client is None:
        # Import settings lazily to ensure env vars are loaded
        from repo_service.config import settings

        logger.info("Initializing MongoClient for database %s", settings.MONGODB_DB_NAME)
        _client = MongoClient(settings.MONGODB_URI, tz_aware=True)
    return _client


def get_database() -> Database:
    from repo_service.config import settings

    client = get_client()
    return client[settings.MONGODB_DB_NAME]


    return get_database()[settings.MONGODB_REPO_COLLECTION]


def get_db() -> Generator[Database, None, None]:
    db = get_database()
    try:
        yield db
    finally:
        # PyMongo manages connection pooling automatically; nothing to close here.
        pass


def close_client() -> None:
    """Close the shared client, if one was opened."""
    global _client
    if _client is not None:
        _client.close()
        _client = None
