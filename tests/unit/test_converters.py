"""
Unit Tests for Connection Converters and Token Encryption
"""

import pytest
from cryptography.fernet import Fernet

from social_connections.infrastructure.database.converters import ConnectionDataConverter
from social_connections.infrastructure.database.models.connection_model import (
    ConnectionDocument,
)
from social_connections.infrastructure.security.token_encryptor import (
    FernetTokenEncryptor,
    NoOpTokenEncryptor,
    TokenDecryptionError,
    build_token_encryptor,
)


class TestConnectionDataConverter:
    """Test suite for the default converter."""

    @pytest.fixture
    def converter(self) -> ConnectionDataConverter:
        return ConnectionDataConverter()

    def test_document_leaves_owner_and_rank_unset(self, converter, make_conn) -> None:
        """Test that the converter does not invent user id or rank."""
        doc = converter.to_document(make_conn("github", "octocat"))

        assert doc.user_id is None
        assert doc.rank is None
        assert doc.provider_id == "github"
        assert doc.provider_user_id == "octocat"

    def test_copies_provider_fields(self, converter, make_conn) -> None:
        """Test that profile and credential fields are carried over."""
        connection = make_conn(
            "twitter",
            "jack",
            display_name="jack",
            profile_url="https://twitter.com/jack",
            image_url="https://img/jack.png",
            access_token="at",
            secret="s",
            refresh_token="rt",
            expire_time=123,
        )

        doc = converter.to_document(connection)

        assert doc.provider_fields() == {
            "displayName": "jack",
            "profileUrl": "https://twitter.com/jack",
            "imageUrl": "https://img/jack.png",
            "accessToken": "at",
            "secret": "s",
            "refreshToken": "rt",
            "expireTime": 123,
        }

    def test_none_document_converts_to_none(self, converter) -> None:
        """Test that a missing document passes through as None."""
        assert converter.to_connection(None) is None

    def test_document_converts_back(self, converter, make_conn) -> None:
        """Test that a stored document yields an equal connection."""
        connection = make_conn("github", "octocat", secret="shh")
        doc = converter.to_document(connection)
        doc.user_id = "alice"
        doc.rank = 1

        restored = converter.to_connection(ConnectionDocument.from_document(doc.to_document()))

        assert restored == connection


class TestEncryptingConverter:
    """Test suite for credential encryption at rest."""

    @pytest.fixture
    def converter(self, encryption_key: str) -> ConnectionDataConverter:
        return ConnectionDataConverter(FernetTokenEncryptor(encryption_key))

    def test_credentials_encrypted(self, converter, make_conn) -> None:
        """Test that stored credentials are ciphertext."""
        doc = converter.to_document(
            make_conn("github", "octocat", access_token="at", secret="s", refresh_token="rt")
        )

        assert doc.access_token != "at"
        assert doc.secret != "s"
        assert doc.refresh_token != "rt"
        assert doc.display_name == "octocat@github"

    def test_missing_credentials_stay_missing(self, converter, make_conn) -> None:
        """Test that absent credentials are not encrypted."""
        doc = converter.to_document(make_conn("github", "octocat", access_token=None))

        assert doc.access_token is None
        assert doc.secret is None

    def test_decrypts_on_read(self, converter, make_conn) -> None:
        """Test that reading back yields the original credentials."""
        connection = make_conn("github", "octocat", access_token="at", refresh_token="rt")

        restored = converter.to_connection(converter.to_document(connection))

        assert restored == connection

    def test_wrong_key_fails(self, converter, make_conn) -> None:
        """Test that ciphertext from another key is rejected."""
        doc = converter.to_document(make_conn("github", "octocat"))
        other = ConnectionDataConverter(FernetTokenEncryptor(Fernet.generate_key()))

        with pytest.raises(TokenDecryptionError):
            other.to_connection(doc)


class TestBuildTokenEncryptor:
    """Test suite for encryptor selection from settings."""

    def test_no_settings_is_noop(self) -> None:
        assert isinstance(build_token_encryptor(None), NoOpTokenEncryptor)

    def test_empty_key_is_noop(self, test_settings) -> None:
        assert isinstance(build_token_encryptor(test_settings), NoOpTokenEncryptor)

    def test_key_enables_fernet(self, encrypted_settings) -> None:
        encryptor = build_token_encryptor(encrypted_settings)

        assert isinstance(encryptor, FernetTokenEncryptor)
        assert encryptor.decrypt(encryptor.encrypt("value")) == "value"

    def test_malformed_key_rejected(self) -> None:
        """Test that an invalid Fernet key fails fast."""
        with pytest.raises(ValueError):
            FernetTokenEncryptor("not-a-key")
