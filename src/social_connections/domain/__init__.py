"""
Domain Layer

Core entities independent of the document store.
"""

from social_connections.domain.models.connection import (
    Connection,
    ConnectionData,
    ConnectionKey,
)

__all__ = [
    "Connection",
    "ConnectionData",
    "ConnectionKey",
]
