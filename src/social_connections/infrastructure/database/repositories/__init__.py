"""
Repository pattern implementations package.
"""

from social_connections.infrastructure.database.repositories.base import BaseRepository
from social_connections.infrastructure.database.repositories.connection_repository import (
    ConnectionRepository,
    create_connection_repository,
)

__all__ = [
    "BaseRepository",
    "ConnectionRepository",
    "create_connection_repository",
]
