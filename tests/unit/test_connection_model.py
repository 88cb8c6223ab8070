"""
Unit Tests for Connection Domain and Document Models
"""

from datetime import datetime, timezone

import pytest

from social_connections.domain.models.connection import (
    Connection,
    ConnectionData,
    ConnectionKey,
)
from social_connections.infrastructure.database.models.connection_model import (
    ConnectionDocument,
)


class TestConnection:
    """Test suite for the domain connection."""

    def test_key(self, make_conn) -> None:
        connection = make_conn("github", "octocat")

        assert connection.key == ConnectionKey("github", "octocat")
        assert str(connection.key) == "github:octocat"

    def test_requires_identity(self) -> None:
        with pytest.raises(ValueError):
            ConnectionData(provider_id="", provider_user_id="x")
        with pytest.raises(ValueError):
            ConnectionData(provider_id="github", provider_user_id="")

    def test_repr_hides_credentials(self, make_conn) -> None:
        connection = make_conn("github", "octocat", access_token="sekrit")

        assert "sekrit" not in repr(connection)
        assert "sekrit" not in repr(connection.to_data())

    def test_to_data_is_a_copy(self, make_conn) -> None:
        connection = make_conn()
        data = connection.to_data()
        data.display_name = "changed"

        assert connection.display_name != "changed"

    def test_expiry(self) -> None:
        now = datetime(2024, 1, 1, tzinfo=timezone.utc)
        now_ms = int(now.timestamp() * 1000)

        never = Connection(ConnectionData("github", "a"))
        expired = Connection(ConnectionData("github", "a", expire_time=now_ms - 1))
        valid = Connection(ConnectionData("github", "a", expire_time=now_ms + 60_000))

        assert not never.has_expired(now)
        assert expired.has_expired(now)
        assert not valid.has_expired(now)


class TestConnectionDocument:
    """Test suite for the stored document shape."""

    def test_camel_case_fields(self) -> None:
        doc = ConnectionDocument(
            provider_id="github",
            provider_user_id="octocat",
            user_id="alice",
            rank=1,
            image_url="https://img",
        ).to_document()

        assert doc["userId"] == "alice"
        assert doc["providerUserId"] == "octocat"
        assert doc["imageUrl"] == "https://img"
        assert doc["rank"] == 1

    def test_rank_omitted_when_unset(self) -> None:
        doc = ConnectionDocument(provider_id="github", provider_user_id="octocat").to_document()

        assert "rank" not in doc

    def test_from_document_ignores_object_id(self) -> None:
        doc = ConnectionDocument.from_document({
            "_id": "abc",
            "userId": "alice",
            "providerId": "github",
            "providerUserId": "octocat",
            "rank": 2,
        })

        assert doc.rank == 2
        assert doc.display_name is None
