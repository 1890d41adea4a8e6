"""
MongoDB connection management.

This module provides:
- The process-wide Motor client (init at startup, close at shutdown)
- Database and collection lookup for DAO injection
- Health check utilities
"""

import logging
from typing import Any, Optional

from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorCollection,
    AsyncIOMotorDatabase,
)
from pymongo.errors import PyMongoError

from ldstore.config import Settings, get_settings

logger = logging.getLogger(__name__)

# Global MongoDB client instance
_client: Optional[AsyncIOMotorClient] = None
_settings: Optional[Settings] = None


def init_db(settings: Optional[Settings] = None, client: Any = None) -> AsyncIOMotorClient:
    """
    Initialize the MongoDB client.

    Args:
        settings: Settings to connect with, defaults to get_settings()
        client: Pre-built Motor-compatible client to adopt instead of connecting
    """
    global _client, _settings

    if _client is not None:
        logger.info("Re-initializing MongoDB client, closing the previous one")
        close_db()

    _settings = settings or get_settings()
    if client is None:
        client = AsyncIOMotorClient(
            _settings.mongodb.url, **_settings.mongodb.client_options()
        )
    _client = client

    logger.info(
        f"MongoDB client initialized ({_sanitize_mongodb_url(_settings.mongodb.url)}, "
        f"database={_settings.mongodb.database})"
    )
    return _client


def close_db() -> None:
    """
    Close MongoDB connection.
    """
    global _client
    if _client is not None:
        _client.close()
        _client = None
        logger.info("MongoDB client closed")


def get_active_settings() -> Settings:
    """
    Settings the client was initialized with, or the global ones.
    """
    return _settings or get_settings()


def get_client() -> AsyncIOMotorClient:
    """
    Get the MongoDB client instance.
    """
    if _client is None:
        raise RuntimeError("Database not initialized. Call init_db() first.")
    return _client


def get_database(name: Optional[str] = None) -> AsyncIOMotorDatabase:
    """
    Get a database, the configured one by default.
    """
    client = get_client()
    return client[name or get_active_settings().mongodb.database]


def get_collection(name: str, database: Optional[str] = None) -> AsyncIOMotorCollection:
    """
    Get a collection from the given or configured database.
    """
    if not name:
        raise ValueError("Collection name cannot be empty")
    return get_database(database)[name]


async def check_db_connection() -> bool:
    """
    Check if MongoDB connection is healthy.
    """
    if _client is None:
        return False

    try:
        await _client.admin.command("ping")
        return True
    except PyMongoError as e:
        logger.warning(f"MongoDB ping failed: {e}")
        return False


def get_db_info() -> dict:
    """
    Get database connection information and status.
    """
    settings = get_active_settings()

    return {
        "status": "connected" if _client is not None else "disconnected",
        "url": _sanitize_mongodb_url(settings.mongodb.url),
        "database": settings.mongodb.database,
        "environment": settings.environment,
    }


def _sanitize_mongodb_url(url: str) -> str:
    """
    Hide password in MongoDB URL for safe logging.
    """
    if "@" not in url:
        return url

    try:
        # Handle mongodb+srv:// or mongodb://
        if "://" in url:
            protocol, rest = url.split("://", 1)
            if "@" in rest:
                credentials, host = rest.rsplit("@", 1)
                if ":" in credentials:
                    username = credentials.split(":", 1)[0]
                    return f"{protocol}://{username}:***@{host}"
        return url
    except ValueError:
        return url
