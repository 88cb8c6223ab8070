"""Domain models package."""

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
