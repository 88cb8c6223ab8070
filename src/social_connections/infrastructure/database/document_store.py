"""
Document Store Client Interface

Abstract interface for the document database holding connection
records. Enables swapping the MongoDB client for an in-memory
store in tests.

Filters, updates and projections use MongoDB query syntax.
Sort specs are lists of (field, direction) pairs with direction
pymongo.ASCENDING or pymongo.DESCENDING.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

Document = dict[str, Any]
SortSpec = Sequence[tuple[str, int]]


class DocumentStore(ABC):
    """
    Abstract document store client.

    Every method is a single request to the underlying store.
    Store errors (pymongo.errors.PyMongoError) propagate unchanged.
    """

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Get store implementation name."""
        pass

    @abstractmethod
    async def initialize(self) -> None:
        """Prepare the store (indexes, warm-up)."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release store resources."""
        pass

    @abstractmethod
    async def find_one(
        self,
        filter: Document,
        sort: Optional[SortSpec] = None,
    ) -> Optional[Document]:
        """
        Return the first document matching filter in sort order.

        Args:
            filter: Query filter
            sort: Optional sort specification

        Returns:
            Matching document or None
        """
        pass

    @abstractmethod
    async def find(
        self,
        filter: Document,
        sort: Optional[SortSpec] = None,
        projection: Optional[Document] = None,
    ) -> list[Document]:
        """
        Return all documents matching filter.

        Args:
            filter: Query filter
            sort: Optional sort specification
            projection: Optional field inclusion map

        Returns:
            Matching documents, possibly empty
        """
        pass

    @abstractmethod
    async def insert_one(self, document: Document) -> Any:
        """
        Insert a document.

        Raises:
            pymongo.errors.DuplicateKeyError: if a unique index is violated

        Returns:
            Inserted document id
        """
        pass

    @abstractmethod
    async def update_one(
        self,
        filter: Document,
        update: Document,
        upsert: bool = False,
    ) -> int:
        """
        Apply an update operator document to the first match.

        Returns:
            Number of documents matched (0 or 1)
        """
        pass

    @abstractmethod
    async def delete_many(self, filter: Document) -> int:
        """
        Delete every document matching filter.

        Returns:
            Number of documents deleted
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check store connectivity."""
        pass
