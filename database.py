"""MongoDB connection and collection handles.

One ``MongoClient`` is opened per process and shared by every request;
pymongo pools connections and is safe to use across threads.
"""
import logging
from typing import Optional

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from config import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class StoreUnavailableError(Exception):
    """The document store could not be reached at startup."""


class Store:
    """Holds the client and the ``users`` / ``books`` collections."""

    def __init__(self, client: MongoClient, config: Optional[Settings] = None) -> None:
        config = config or default_settings
        self.client = client
        self.db = client[config.mongodb_database]
        self.users: Collection = self.db[config.users_collection]
        self.books: Collection = self.db[config.books_collection]

    def ping(self) -> None:
        """Round-trip to the server; raises StoreUnavailableError on failure."""
        try:
            self.client.admin.command("ping")
        except PyMongoError as e:
            raise StoreUnavailableError(f"MongoDB is not reachable: {e}") from e

    def close(self) -> None:
        self.client.close()


def connect_store(config: Optional[Settings] = None) -> Store:
    """Open the client, verify connectivity and return the store handle.

    The driver connects lazily, so the ping is what actually proves the
    server is there. Failure is fatal to the caller.
    """
    config = config or default_settings
    client = MongoClient(config.mongodb_uri, serverSelectionTimeoutMS=config.mongodb_timeout_ms)
    store = Store(client, config)
    try:
        store.ping()
    except StoreUnavailableError:
        logger.critical(f"Could not connect to MongoDB at {config.mongodb_uri}")
        client.close()
        raise
    logger.info(f"Connected to MongoDB at {config.mongodb_uri} (database={config.mongodb_database})")
    return store
