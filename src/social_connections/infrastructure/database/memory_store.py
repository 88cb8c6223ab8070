"""In-memory DocumentStore for tests and local runs without MongoDB."""

import copy
from typing import Any, Optional, Sequence

from bson import ObjectId
from pymongo import DESCENDING
from pymongo.errors import DuplicateKeyError

from social_connections.infrastructure.database.document_store import (
    Document,
    DocumentStore,
    SortSpec,
)
from social_connections.infrastructure.database.models.connection_model import (
    IDENTITY_FIELDS,
)


def _matches(doc: Document, filter: Document) -> bool:
    for key, condition in filter.items():
        if key == "$or":
            if not any(_matches(doc, sub) for sub in condition):
                return False
        elif isinstance(condition, dict) and "$in" in condition:
            if doc.get(key) not in list(condition["$in"]):
                return False
        elif doc.get(key) != condition:
            return False
    return True


def _sorted(docs: list[Document], sort: Optional[SortSpec]) -> list[Document]:
    if not sort:
        return docs
    result = list(docs)
    # Stable sorts applied from the least significant key
    for field, direction in reversed(list(sort)):
        result.sort(
            key=lambda d: (d.get(field) is None, d.get(field)),
            reverse=direction == DESCENDING,
        )
    return result


def _project(doc: Document, projection: Optional[Document]) -> Document:
    if not projection:
        return copy.deepcopy(doc)
    included = {k for k, v in projection.items() if v}
    result = {k: copy.deepcopy(v) for k, v in doc.items() if k in included}
    if projection.get("_id", 1) and "_id" in doc:
        result["_id"] = doc["_id"]
    return result


class InMemoryDocumentStore(DocumentStore):
    """
    Dict-backed fake honouring the query subset the repository uses.

    Supports equality, $in and $or filters, multi-key sorts,
    inclusion projections, $set/$setOnInsert updates and a single
    unique compound key that raises pymongo's DuplicateKeyError.
    """

    def __init__(self, unique_key: Sequence[str] = IDENTITY_FIELDS) -> None:
        self._docs: list[Document] = []
        self._unique_key = tuple(unique_key)
        self._calls: list[tuple] = []

    @property
    def provider_name(self) -> str:
        return "memory"

    @property
    def documents(self) -> list[Document]:
        """Snapshot of stored documents in insertion order."""
        return copy.deepcopy(self._docs)

    @property
    def calls(self) -> list[tuple]:
        return list(self._calls)

    def seed(self, *documents: Document) -> None:
        for doc in documents:
            self._insert(doc)

    async def initialize(self) -> None:
        pass

    async def close(self) -> None:
        self._docs.clear()

    async def find_one(
        self,
        filter: Document,
        sort: Optional[SortSpec] = None,
    ) -> Optional[Document]:
        self._calls.append(("find_one", filter, sort))
        matches = _sorted([d for d in self._docs if _matches(d, filter)], sort)
        return copy.deepcopy(matches[0]) if matches else None

    async def find(
        self,
        filter: Document,
        sort: Optional[SortSpec] = None,
        projection: Optional[Document] = None,
    ) -> list[Document]:
        self._calls.append(("find", filter, sort, projection))
        matches = _sorted([d for d in self._docs if _matches(d, filter)], sort)
        return [_project(d, projection) for d in matches]

    async def insert_one(self, document: Document) -> Any:
        self._calls.append(("insert_one", document))
        return self._insert(document)

    async def update_one(
        self,
        filter: Document,
        update: Document,
        upsert: bool = False,
    ) -> int:
        self._calls.append(("update_one", filter, update, upsert))
        for doc in self._docs:
            if _matches(doc, filter):
                candidate = {**doc, **copy.deepcopy(update.get("$set", {}))}
                self._check_unique(candidate, ignore=doc)
                doc.update(candidate)
                return 1

        if upsert:
            new_doc = {
                k: v for k, v in filter.items()
                if not k.startswith("$") and not isinstance(v, dict)
            }
            new_doc.update(update.get("$setOnInsert", {}))
            new_doc.update(update.get("$set", {}))
            self._insert(new_doc)
        return 0

    async def delete_many(self, filter: Document) -> int:
        self._calls.append(("delete_many", filter))
        kept = [d for d in self._docs if not _matches(d, filter)]
        deleted = len(self._docs) - len(kept)
        self._docs = kept
        return deleted

    async def health_check(self) -> bool:
        return True

    def _insert(self, document: Document) -> Any:
        doc = copy.deepcopy(document)
        doc.setdefault("_id", ObjectId())
        self._check_unique(doc)
        self._docs.append(doc)
        return doc["_id"]

    def _check_unique(self, doc: Document, ignore: Optional[Document] = None) -> None:
        key = tuple(doc.get(f) for f in self._unique_key)
        for existing in self._docs:
            if existing is ignore:
                continue
            if tuple(existing.get(f) for f in self._unique_key) == key:
                raise DuplicateKeyError(
                    f"E11000 duplicate key error dup key: {dict(zip(self._unique_key, key))}",
                    code=11000,
                )
