"""Tests configuration and fixtures."""

import pytest
from cryptography.fernet import Fernet
from pydantic import SecretStr

from social_connections.config import MongoSettings, Settings
from social_connections.domain.models.connection import Connection, ConnectionData
from social_connections.infrastructure.database.converters import ConnectionDataConverter
from social_connections.infrastructure.database.memory_store import InMemoryDocumentStore
from social_connections.infrastructure.database.repositories.connection_repository import (
    ConnectionRepository,
)


def make_connection(
    provider_id: str = "github",
    provider_user_id: str = "octocat",
    **fields,
) -> Connection:
    """Build a domain connection with sensible defaults."""
    fields.setdefault("display_name", f"{provider_user_id}@{provider_id}")
    fields.setdefault("access_token", f"token-{provider_user_id}")
    return Connection(ConnectionData(provider_id, provider_user_id, **fields))


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings with mock values."""
    return Settings(
        env="development",
        debug=True,
        mongo=MongoSettings(database="social_test", collection="connections_test"),
    )


@pytest.fixture
def encryption_key() -> str:
    return Fernet.generate_key().decode("ascii")


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def repository(store: InMemoryDocumentStore) -> ConnectionRepository:
    return ConnectionRepository(store, ConnectionDataConverter())


@pytest.fixture
def encrypted_settings(encryption_key: str) -> Settings:
    return Settings(token_encryption_key=SecretStr(encryption_key))


@pytest.fixture
def make_conn():
    """Factory fixture for domain connections."""
    return make_connection
