"""
Document models package.
"""

from social_connections.infrastructure.database.models.connection_model import (
    IDENTITY_FIELDS,
    PROVIDER_ID,
    PROVIDER_USER_ID,
    RANK,
    USER_ID,
    ConnectionDocument,
)

__all__ = [
    "ConnectionDocument",
    "IDENTITY_FIELDS",
    "PROVIDER_ID",
    "PROVIDER_USER_ID",
    "RANK",
    "USER_ID",
]
