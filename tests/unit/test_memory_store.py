"""
Unit Tests for the In-Memory Document Store

Covers the query subset the repository depends on.
"""

import pytest
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import DuplicateKeyError

from social_connections.infrastructure.database.memory_store import InMemoryDocumentStore


def doc(user: str, provider: str, puid: str, rank: int) -> dict:
    return {"userId": user, "providerId": provider, "providerUserId": puid, "rank": rank}


@pytest.fixture
def seeded() -> InMemoryDocumentStore:
    store = InMemoryDocumentStore()
    store.seed(
        doc("alice", "twitter", "t1", 1),
        doc("alice", "github", "g2", 2),
        doc("alice", "github", "g1", 1),
        doc("bob", "github", "g1", 1),
    )
    return store


class TestFind:
    """Tests for filters, sorting and projection."""

    async def test_equality_filter(self, seeded) -> None:
        result = await seeded.find({"userId": "bob"})

        assert [d["providerUserId"] for d in result] == ["g1"]

    async def test_in_and_or(self, seeded) -> None:
        """Test $or groups combined with a top-level equality."""
        result = await seeded.find({
            "userId": "alice",
            "$or": [
                {"providerId": "github", "providerUserId": {"$in": ["g2"]}},
                {"providerId": "twitter", "providerUserId": {"$in": ["t1", "t7"]}},
            ],
        })

        assert sorted(d["providerUserId"] for d in result) == ["g2", "t1"]

    async def test_multi_key_sort(self, seeded) -> None:
        result = await seeded.find(
            {"userId": "alice"},
            sort=[("providerId", ASCENDING), ("rank", ASCENDING)],
        )

        assert [d["providerUserId"] for d in result] == ["g1", "g2", "t1"]

    async def test_find_one_descending(self, seeded) -> None:
        result = await seeded.find_one(
            {"userId": "alice", "providerId": "github"},
            sort=[("rank", DESCENDING)],
        )

        assert result["rank"] == 2

    async def test_projection(self, seeded) -> None:
        result = await seeded.find({"providerUserId": "g1"}, projection={"userId": 1, "_id": 0})

        assert result == [{"userId": "alice"}, {"userId": "bob"}]

    async def test_results_are_copies(self, seeded) -> None:
        """Test that mutating a result does not touch the store."""
        found = await seeded.find_one({"userId": "bob"})
        found["rank"] = 99

        assert (await seeded.find_one({"userId": "bob"}))["rank"] == 1


class TestWrites:
    """Tests for inserts, updates and deletes."""

    async def test_insert_assigns_id(self) -> None:
        store = InMemoryDocumentStore()

        inserted_id = await store.insert_one(doc("alice", "github", "g1", 1))

        assert store.documents[0]["_id"] == inserted_id

    async def test_unique_key_enforced(self, seeded) -> None:
        with pytest.raises(DuplicateKeyError):
            await seeded.insert_one(doc("alice", "github", "g1", 5))

    async def test_update_set(self, seeded) -> None:
        matched = await seeded.update_one(
            {"userId": "bob", "providerId": "github", "providerUserId": "g1"},
            {"$set": {"displayName": "Bob"}},
        )

        assert matched == 1
        assert (await seeded.find_one({"userId": "bob"}))["displayName"] == "Bob"

    async def test_update_without_match(self, seeded) -> None:
        matched = await seeded.update_one({"userId": "zed"}, {"$set": {"rank": 3}})

        assert matched == 0
        assert len(seeded.documents) == 4

    async def test_upsert_inserts(self) -> None:
        store = InMemoryDocumentStore()

        await store.update_one(
            {"userId": "alice", "providerId": "github", "providerUserId": "g1"},
            {"$set": {"displayName": "A"}, "$setOnInsert": {"rank": 1}},
            upsert=True,
        )

        (stored,) = store.documents
        assert stored["rank"] == 1
        assert stored["displayName"] == "A"

    async def test_delete_many(self, seeded) -> None:
        deleted = await seeded.delete_many({"userId": "alice", "providerId": "github"})

        assert deleted == 2
        assert len(seeded.documents) == 2

    async def test_calls_recorded(self, seeded) -> None:
        await seeded.delete_many({"userId": "nobody"})

        assert seeded.calls[-1] == ("delete_many", {"userId": "nobody"})
