"""
Base Repository Pattern

Provides generic async document operations for repositories.
Implements the Repository pattern for clean separation between
domain logic and data access.
"""

from typing import Any, Callable, Generic, Optional, Protocol, TypeVar

from pymongo.errors import PyMongoError

from social_connections.config.logging_config import get_logger
from social_connections.infrastructure.database.document_store import (
    Document,
    DocumentStore,
    SortSpec,
)

logger = get_logger(__name__)


class StoredModel(Protocol):
    """Model types that can be rebuilt from a stored document."""

    @classmethod
    def from_document(cls, doc: Document) -> Any: ...

    def to_document(self) -> Document: ...


ModelT = TypeVar("ModelT", bound=StoredModel)


class BaseRepository(Generic[ModelT]):
    """
    Generic base repository over a DocumentStore.

    Wraps each store call so failures are logged once with the
    operation name and then re-raised unchanged.

    Usage:
        class ConnectionRepository(BaseRepository[ConnectionDocument]):
            pass

        repo = ConnectionRepository(ConnectionDocument, store)
        doc = await repo.find_one({"userId": "u1"})
    """

    def __init__(self, model: type[ModelT], store: DocumentStore) -> None:
        """
        Initialize repository with model class and store.

        Args:
            model: Document model class
            store: Document store client
        """
        self._model = model
        self._store = store

    @property
    def store(self) -> DocumentStore:
        return self._store

    async def find_one(
        self,
        filter: Document,
        *,
        sort: Optional[SortSpec] = None,
    ) -> Optional[ModelT]:
        """
        Get the first matching model.

        Returns:
            Model if found, None otherwise
        """
        doc = await self._call("find_one", self._store.find_one, filter, sort)
        return self._model.from_document(doc) if doc is not None else None

    async def find_many(
        self,
        filter: Document,
        *,
        sort: Optional[SortSpec] = None,
    ) -> list[ModelT]:
        """Get all matching models in sort order."""
        docs = await self._call("find", self._store.find, filter, sort)
        return [self._model.from_document(doc) for doc in docs]

    async def find_field(self, filter: Document, field: str) -> list[Any]:
        """Get one field of every matching document."""
        docs = await self._call("find", self._store.find, filter, None, {field: 1, "_id": 0})
        return [doc[field] for doc in docs if field in doc]

    async def insert(self, entity: ModelT) -> Any:
        """
        Insert a new model.

        Returns:
            Store-assigned document id
        """
        return await self._call("insert_one", self._store.insert_one, entity.to_document())

    async def upsert_where(
        self,
        filter: Document,
        fields: Document,
        *,
        on_insert: Optional[Document] = None,
    ) -> bool:
        """
        Set fields on the first matching document, inserting one if none match.

        The inserted document carries the equality fields of filter,
        fields and on_insert.

        Returns:
            True if an existing document matched
        """
        update: Document = {"$set": fields}
        if on_insert:
            update["$setOnInsert"] = on_insert
        matched = await self._call("update_one", self._store.update_one, filter, update, True)
        return matched > 0

    async def delete_where(self, filter: Document) -> int:
        """
        Delete every matching document.

        Returns:
            Number of documents deleted
        """
        return await self._call("delete_many", self._store.delete_many, filter)

    async def _call(self, operation: str, method: Callable, *args: Any) -> Any:
        try:
            return await method(*args)
        except PyMongoError as e:
            logger.error(
                "Document store operation failed",
                operation=operation,
                store=self._store.provider_name,
                error_type=type(e).__name__,
                error=str(e),
            )
            raise
