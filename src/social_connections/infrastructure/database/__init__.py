"""
Database infrastructure components.
"""

from social_connections.infrastructure.database.connection import (
    DatabaseManager,
    get_db_manager,
)
from social_connections.infrastructure.database.converters import (
    ConnectionDataConverter,
    Converter,
)
from social_connections.infrastructure.database.document_store import DocumentStore
from social_connections.infrastructure.database.memory_store import InMemoryDocumentStore
from social_connections.infrastructure.database.mongo_store import MongoDocumentStore

__all__ = [
    "ConnectionDataConverter",
    "Converter",
    "DatabaseManager",
    "DocumentStore",
    "InMemoryDocumentStore",
    "MongoDocumentStore",
    "get_db_manager",
]
