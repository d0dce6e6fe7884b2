"""MongoDB connection bootstrap."""

import logging

from pymongo import MongoClient
from pymongo.errors import PyMongoError

from quotes_api.exceptions import DatabaseConnectionError

logger = logging.getLogger(__name__)


def connect_database(settings):
    """Open the MongoDB client and return ``(client, db)``.

    The connection is checked with a ``ping`` so an unreachable server fails
    here instead of on the first request.
    """
    logger.info("Connecting to MongoDB server...")
    try:
        client = MongoClient(settings.mongo_url, serverSelectionTimeoutMS=settings.mongo_timeout_ms)
    except PyMongoError as e:
        raise DatabaseConnectionError(f"Invalid MongoDB configuration: {e}") from e

    try:
        client.admin.command("ping")
    except PyMongoError as e:
        client.close()
        raise DatabaseConnectionError(f"Could not connect to MongoDB: {e}") from e

    db = client.get_default_database(default=settings.mongo_database)
    logger.info("Connected to MongoDB server (database: %s)", db.name)
    return client, db
