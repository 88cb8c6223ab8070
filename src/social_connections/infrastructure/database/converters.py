"""
Connection Converters

Bidirectional mapping between domain Connection objects and stored
ConnectionDocument records. The repository never reads provider
fields itself; it hands them to a converter.
"""

from abc import ABC, abstractmethod
from typing import Optional

from social_connections.domain.models.connection import Connection, ConnectionData
from social_connections.infrastructure.database.models.connection_model import (
    ConnectionDocument,
)
from social_connections.infrastructure.security.token_encryptor import (
    NoOpTokenEncryptor,
    TokenEncryptor,
)


class Converter(ABC):
    """
    Maps connections to documents and back.

    to_connection(None) must return None so that lookups can pass a
    missing document straight through.
    """

    @abstractmethod
    def to_document(self, connection: Connection) -> ConnectionDocument:
        """Convert a domain connection; user_id and rank are left unset."""
        pass

    @abstractmethod
    def to_connection(self, document: Optional[ConnectionDocument]) -> Optional[Connection]:
        """Convert a stored document into a domain connection."""
        pass


class ConnectionDataConverter(Converter):
    """
    Default converter based on ConnectionData.

    Credentials are passed through a TokenEncryptor so they can be
    stored encrypted.

    Usage:
        converter = ConnectionDataConverter(FernetTokenEncryptor(key))
        doc = converter.to_document(connection)
    """

    def __init__(self, encryptor: Optional[TokenEncryptor] = None) -> None:
        self._encryptor = encryptor or NoOpTokenEncryptor()

    def to_document(self, connection: Connection) -> ConnectionDocument:
        data = connection.to_data()
        return ConnectionDocument(
            provider_id=data.provider_id,
            provider_user_id=data.provider_user_id,
            display_name=data.display_name,
            profile_url=data.profile_url,
            image_url=data.image_url,
            access_token=self._encrypt(data.access_token),
            secret=self._encrypt(data.secret),
            refresh_token=self._encrypt(data.refresh_token),
            expire_time=data.expire_time,
        )

    def to_connection(self, document: Optional[ConnectionDocument]) -> Optional[Connection]:
        if document is None:
            return None
        return Connection(
            ConnectionData(
                provider_id=document.provider_id,
                provider_user_id=document.provider_user_id,
                display_name=document.display_name,
                profile_url=document.profile_url,
                image_url=document.image_url,
                access_token=self._decrypt(document.access_token),
                secret=self._decrypt(document.secret),
                refresh_token=self._decrypt(document.refresh_token),
                expire_time=document.expire_time,
            ),
            rank=document.rank,
        )

    def _encrypt(self, value: Optional[str]) -> Optional[str]:
        return self._encryptor.encrypt(value) if value else value

    def _decrypt(self, value: Optional[str]) -> Optional[str]:
        return self._encryptor.decrypt(value) if value else value
