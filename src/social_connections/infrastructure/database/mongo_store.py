"""
MongoDB Document Store

DocumentStore implementation over a pymongo asyncio collection.
"""

from typing import Any, Optional

from pymongo import ASCENDING, IndexModel
from pymongo.asynchronous.collection import AsyncCollection
from pymongo.errors import PyMongoError

from social_connections.config.logging_config import get_logger
from social_connections.infrastructure.database.document_store import (
    Document,
    DocumentStore,
    SortSpec,
)
from social_connections.infrastructure.database.models.connection_model import (
    PROVIDER_ID,
    PROVIDER_USER_ID,
    RANK,
    USER_ID,
)
from social_connections.infrastructure.metrics import track_store_operation

logger = get_logger(__name__)


CONNECTION_INDEXES: list[IndexModel] = [
    IndexModel(
        [(USER_ID, ASCENDING), (PROVIDER_ID, ASCENDING), (PROVIDER_USER_ID, ASCENDING)],
        name="connection_key_unique",
        unique=True,
    ),
    IndexModel(
        [(USER_ID, ASCENDING), (PROVIDER_ID, ASCENDING), (RANK, ASCENDING)],
        name="connection_rank",
    ),
    # get_user_ids lookups have no userId
    IndexModel(
        [(PROVIDER_ID, ASCENDING), (PROVIDER_USER_ID, ASCENDING)],
        name="provider_identity",
    ),
]


class MongoDocumentStore(DocumentStore):
    """
    MongoDB-backed document store.

    Usage:
        store = MongoDocumentStore(client[db_name][collection_name])
        await store.initialize()
        doc = await store.find_one({"userId": "u1"})
    """

    def __init__(
        self,
        collection: AsyncCollection,
        indexes: Optional[list[IndexModel]] = None,
    ) -> None:
        """
        Initialize store over an existing collection.

        Args:
            collection: pymongo async collection
            indexes: Indexes ensured by initialize() (defaults to the connection indexes)
        """
        self._collection = collection
        self._indexes = CONNECTION_INDEXES if indexes is None else indexes

    @property
    def provider_name(self) -> str:
        return "mongodb"

    @property
    def collection(self) -> AsyncCollection:
        return self._collection

    async def initialize(self) -> None:
        """Ensure the configured indexes exist."""
        if not self._indexes:
            return
        names = await self._collection.create_indexes(self._indexes)
        logger.info(
            "Connection indexes ensured",
            collection=self._collection.name,
            indexes=names,
        )

    async def close(self) -> None:
        # The client owns the sockets; DatabaseManager closes it
        pass

    @track_store_operation("find_one")
    async def find_one(
        self,
        filter: Document,
        sort: Optional[SortSpec] = None,
    ) -> Optional[Document]:
        return await self._collection.find_one(filter, sort=list(sort) if sort else None)

    @track_store_operation("find")
    async def find(
        self,
        filter: Document,
        sort: Optional[SortSpec] = None,
        projection: Optional[Document] = None,
    ) -> list[Document]:
        cursor = self._collection.find(
            filter,
            projection,
            sort=list(sort) if sort else None,
        )
        return await cursor.to_list()

    @track_store_operation("insert_one")
    async def insert_one(self, document: Document) -> Any:
        # pymongo adds _id to the passed dict
        result = await self._collection.insert_one(dict(document))
        return result.inserted_id

    @track_store_operation("update_one")
    async def update_one(
        self,
        filter: Document,
        update: Document,
        upsert: bool = False,
    ) -> int:
        result = await self._collection.update_one(filter, update, upsert=upsert)
        return result.matched_count

    @track_store_operation("delete_many")
    async def delete_many(self, filter: Document) -> int:
        result = await self._collection.delete_many(filter)
        return result.deleted_count

    async def health_check(self) -> bool:
        """
        Check MongoDB connectivity.

        Returns:
            True if the server answers ping, False otherwise
        """
        try:
            await self._collection.database.command("ping")
            return True
        except PyMongoError as e:
            logger.error("Document store health check failed", error=str(e))
            return False
