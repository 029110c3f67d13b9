"""
Album Store — Database Connection Management
============================================

What:  Creates the MongoDB client and hands out the album repository.
Why:   Centralizes all persistence connection logic in one place.
How:   PyMongo's `AsyncMongoClient` connects lazily, so `connect_persistence`
       pings the server before returning. A failed ping is a StartupError and
       the service never starts serving requests.
Who:   Called from the application lifespan (main.py).
When:  Once at startup; `dispose_client` runs at shutdown.

Connection Pooling:
    The driver owns its connection pool; the client is shared by every
    request for the lifetime of the process and is safe for concurrent use.
"""

import logging
from typing import Tuple

from pymongo import AsyncMongoClient
from pymongo.errors import PyMongoError

from albumstore.config import Settings
from albumstore.exceptions import StartupError
from albumstore.repository import MongoAlbumRepository

logger = logging.getLogger(__name__)


def create_client(settings: Settings) -> AsyncMongoClient:
    """Builds a client from settings without touching the network."""
    return AsyncMongoClient(
        settings.mongo_url,
        serverSelectionTimeoutMS=settings.mongo_timeout_ms,
    )


async def connect_persistence(
    settings: Settings,
) -> Tuple[AsyncMongoClient, MongoAlbumRepository]:
    """
    Connect to MongoDB and return the client with a repository over the
    configured collection.

    Raises:
        StartupError: The server could not be reached or rejected the ping.
    """
    client = create_client(settings)
    collection = client[settings.mongo_database][settings.mongo_collection]
    repository = MongoAlbumRepository(collection)
    try:
        await repository.ping()
    except PyMongoError as e:
        await client.close()
        raise StartupError(
            message=f"Could not connect to MongoDB: {e}",
            context={"mongo_database": settings.mongo_database},
        ) from e

    logger.info(
        "Connected to MongoDB (database=%s, collection=%s)",
        settings.mongo_database,
        settings.mongo_collection,
    )
    return client, repository


async def dispose_client(client: AsyncMongoClient) -> None:
    """Closes all pooled connections."""
    await client.close()
