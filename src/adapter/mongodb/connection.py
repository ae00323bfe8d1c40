"""MongoDB client lifecycle.

The client is opened once at process start and handed explicitly to the
repositories that need it; callers own closing it at shutdown.
"""

import logging

from pymongo import MongoClient
from pymongo.errors import PyMongoError

from domain.model.errors import StoreUnavailableError

logger = logging.getLogger(__name__)

# Driver-level logs are noisy at INFO
logging.getLogger('pymongo').setLevel(logging.WARNING)


def open_client(mongo_url: str | None) -> MongoClient:
    """Connect to MongoDB and verify the connection with a ping.

    Raises:
        StoreUnavailableError: URL not configured or server unreachable
    """
    if not mongo_url:
        logger.error("[MONGODB] MONGO_URL not configured.")
        raise StoreUnavailableError("MONGO_URL not configured")

    try:
        client = MongoClient(
            mongo_url,
            serverSelectionTimeoutMS=5000,
            connectTimeoutMS=5000,
            socketTimeoutMS=30000,
            maxPoolSize=10,
            minPoolSize=0,
            maxIdleTimeMS=30000,
            waitQueueTimeoutMS=10000,
            retryWrites=True,
            retryReads=True,
        )
        client.admin.command('ping')
    except PyMongoError as e:
        logger.error(f"[MONGODB] Connection failed: {str(e)[:200]}")
        raise StoreUnavailableError("Could not connect to MongoDB") from e

    logger.info("[MONGODB] Connected successfully")
    return client


def ping(client: MongoClient | None) -> bool:
    """Return True if the client can reach the server."""
    if client is None:
        return False
    try:
        client.admin.command('ping')
        return True
    except PyMongoError as e:
        logger.warning("[MONGODB] Ping failed", extra={"error": str(e)[:200]})
        return False


def close_client(client: MongoClient | None) -> None:
    if client is None:
        return
    client.close()
    logger.info("[MONGODB] Connection closed")
