"""Create the users collection indexes.

Run once against a fresh database (the API also does this at startup):

    python -m scripts.init_database
"""

import logging
import sys

from adapter.mongodb.connection import close_client, open_client
from adapter.mongodb.indexes import ensure_all_indexes
from api.settings import get_settings
from domain.model.errors import StoreUnavailableError
from utils.logging import setup_structured_logging

logger = logging.getLogger(__name__)


def main() -> int:
    settings = get_settings()
    logger.info("Initializing database...", extra={"database": settings.database_name})

    try:
        client = open_client(settings.mongo_url)
    except StoreUnavailableError as e:
        logger.error(f"Database initialization failed: {e}")
        return 1

    try:
        if not ensure_all_indexes(client[settings.database_name]):
            logger.error("Database initialization failed: could not create indexes")
            return 1
    finally:
        close_client(client)

    logger.info("Database initialization completed successfully")
    return 0


if __name__ == "__main__":
    setup_structured_logging()
    sys.exit(main())
