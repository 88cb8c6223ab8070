"""
Database Connection Management

Async MongoDB client lifecycle with:
- Connection pooling (pymongo-managed)
- Index creation on startup
- Health checks
- Graceful shutdown

SECURITY: Connection URIs may contain credentials and must
never be logged.
"""

from functools import lru_cache
from typing import Optional

from pymongo import AsyncMongoClient
from pymongo.asynchronous.collection import AsyncCollection

from social_connections.config import Settings, get_settings
from social_connections.config.logging_config import get_logger
from social_connections.infrastructure.database.mongo_store import MongoDocumentStore
from social_connections.infrastructure.metrics import update_system_info

logger = get_logger(__name__)


class DatabaseManager:
    """
    Manages the MongoDB client and the connection collection.

    Usage:
        db = DatabaseManager()
        await db.initialize()
        store = db.document_store()
        # use store
        await db.close()
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        """Initialize database manager (connection not established)."""
        self._settings = settings
        self._client: Optional[AsyncMongoClient] = None
        self._store: Optional[MongoDocumentStore] = None
        self._initialized = False

    async def initialize(self) -> None:
        """
        Create the client and ensure connection indexes.

        Should be called once during application startup.
        """
        if self._initialized:
            logger.warning("Database already initialized")
            return

        settings = self._settings or get_settings()
        mongo = settings.mongo

        self._client = AsyncMongoClient(
            mongo.uri.get_secret_value(),
            maxPoolSize=mongo.max_pool_size,
            serverSelectionTimeoutMS=mongo.server_selection_timeout_ms,
            tz_aware=True,
        )
        collection = self._client[mongo.database][mongo.collection]
        self._store = MongoDocumentStore(collection)

        if mongo.create_indexes:
            await self._store.initialize()

        self._initialized = True
        update_system_info(settings.env)
        logger.info(
            "MongoDB client initialized",
            database=mongo.database,
            collection=mongo.collection,
        )

    async def close(self) -> None:
        """
        Close the client and its pooled sockets.

        Should be called during application shutdown.
        """
        if self._client:
            await self._client.close()
            self._client = None
            self._store = None
            self._initialized = False
            logger.info("MongoDB connections closed")

    def collection(self) -> AsyncCollection:
        """Get the raw connection collection."""
        return self.document_store().collection

    def document_store(self) -> MongoDocumentStore:
        """
        Get the document store over the connection collection.

        Raises:
            RuntimeError: if initialize() has not been called
        """
        if not self._store:
            raise RuntimeError("Database not initialized. Call initialize() first.")
        return self._store

    async def health_check(self) -> bool:
        """
        Check database connectivity.

        Returns:
            True if MongoDB is reachable, False otherwise
        """
        if not self._store:
            return False
        return await self._store.health_check()

    @property
    def client(self) -> Optional[AsyncMongoClient]:
        """Get the pymongo async client."""
        return self._client

    @property
    def is_initialized(self) -> bool:
        """Check if database is initialized."""
        return self._initialized


@lru_cache()
def get_db_manager() -> DatabaseManager:
    """
    Get the global database manager instance.

    Returns:
        DatabaseManager: Singleton database manager
    """
    return DatabaseManager()
