"""
Connection Repository

Data access layer for users' provider connections with rank
semantics: within (userId, providerId) ranks run 1, 2, 3, ...
and rank 1 is the primary connection.
"""

from collections.abc import Iterable, Mapping
from typing import Optional, Union

from pymongo import ASCENDING, DESCENDING

from social_connections.config import Settings
from social_connections.config.logging_config import get_logger
from social_connections.domain.models.connection import Connection, ConnectionKey
from social_connections.infrastructure.database.converters import (
    ConnectionDataConverter,
    Converter,
)
from social_connections.infrastructure.database.document_store import (
    DocumentStore,
    SortSpec,
)
from social_connections.infrastructure.database.models.connection_model import (
    PROVIDER_ID,
    PROVIDER_USER_ID,
    RANK,
    USER_ID,
    ConnectionDocument,
)
from social_connections.infrastructure.database.repositories.base import BaseRepository
from social_connections.infrastructure.security.token_encryptor import build_token_encryptor

logger = get_logger(__name__)

PRIMARY_RANK = 1

BY_PROVIDER_THEN_RANK: SortSpec = [(PROVIDER_ID, ASCENDING), (RANK, ASCENDING)]
BY_RANK: SortSpec = [(RANK, ASCENDING)]
BY_RANK_DESC: SortSpec = [(RANK, DESCENDING)]

ProviderUsers = Mapping[str, Iterable[str]]


def _as_id_list(provider_user_ids: Union[str, Iterable[str]]) -> list[str]:
    # A bare string is one id, not an iterable of characters
    if isinstance(provider_user_ids, str):
        return [provider_user_ids]
    return list(provider_user_ids)


class ConnectionRepository(BaseRepository[ConnectionDocument]):
    """
    Repository for connection records.

    Conversion between Connection and ConnectionDocument is delegated
    to the converter. Each public method issues exactly one request
    to the store; get_max_rank followed by create is not atomic, and
    callers rely on the unique key index to reject collisions.

    Usage:
        repo = ConnectionRepository(store, ConnectionDataConverter())
        rank = await repo.get_max_rank("u1", "github")
        await repo.create("u1", connection, rank)
    """

    def __init__(self, store: DocumentStore, converter: Converter) -> None:
        """Initialize with store and converter."""
        super().__init__(ConnectionDocument, store)
        self._converter = converter

    async def get_max_rank(self, user_id: str, provider_id: str) -> int:
        """
        Get the rank for the next connection to a provider.

        Returns:
            1 + highest existing rank, or 1 if the user has no
            connection to the provider
        """
        top = await self.find_one(
            {USER_ID: user_id, PROVIDER_ID: provider_id},
            sort=BY_RANK_DESC,
        )
        if top is None or top.rank is None:
            return PRIMARY_RANK
        return top.rank + 1

    async def create(self, user_id: str, connection: Connection, rank: int) -> None:
        """
        Insert a new connection record.

        Args:
            user_id: Owner of the connection
            connection: Domain connection to store
            rank: Rank to assign, usually get_max_rank()

        Raises:
            ValueError: if rank is below 1
            pymongo.errors.DuplicateKeyError: if the key already exists
        """
        if rank < PRIMARY_RANK:
            raise ValueError(f"rank must be >= {PRIMARY_RANK}, got {rank}")

        doc = self._converter.to_document(connection)
        doc.user_id = user_id
        doc.rank = rank
        await self.insert(doc)
        logger.debug(
            "Connection created",
            user_id=user_id,
            provider_id=doc.provider_id,
            rank=rank,
        )

    async def update(
        self,
        user_id: str,
        connection: Connection,
        rank: int = PRIMARY_RANK,
    ) -> bool:
        """
        Replace the provider fields of a connection, inserting it if missing.

        The record is matched by (user_id, provider id, provider user id).
        An existing record keeps its rank; a newly inserted one gets rank.

        Args:
            user_id: Owner of the connection
            connection: Domain connection to store
            rank: Rank for the record if none matched

        Returns:
            True if an existing record matched, False if one was inserted

        Raises:
            ValueError: if rank is below 1
        """
        if rank < PRIMARY_RANK:
            raise ValueError(f"rank must be >= {PRIMARY_RANK}, got {rank}")

        doc = self._converter.to_document(connection)
        matched = await self.upsert_where(
            self._key_filter(user_id, doc.provider_id, doc.provider_user_id),
            doc.provider_fields(),
            on_insert={RANK: rank},
        )
        if not matched:
            logger.debug(
                "Update inserted connection",
                user_id=user_id,
                provider_id=doc.provider_id,
                rank=rank,
            )
        return matched

    async def remove(self, user_id: str, target: Union[ConnectionKey, str]) -> int:
        """
        Delete one connection by key, or all connections to a provider.

        Args:
            user_id: Owner of the connections
            target: ConnectionKey for a single record, or a provider id

        Returns:
            Number of records deleted
        """
        if isinstance(target, ConnectionKey):
            return await self.remove_connection(user_id, target)
        if isinstance(target, str):
            return await self.remove_connections(user_id, target)
        raise TypeError(
            f"remove() expects a ConnectionKey or provider id, got {type(target).__name__}"
        )

    async def remove_connection(self, user_id: str, key: ConnectionKey) -> int:
        """Delete the connection matching the full key."""
        deleted = await self.delete_where(
            self._key_filter(user_id, key.provider_id, key.provider_user_id)
        )
        logger.debug("Connection removed", user_id=user_id, key=str(key), deleted=deleted)
        return deleted

    async def remove_connections(self, user_id: str, provider_id: str) -> int:
        """Delete every connection the user has to a provider."""
        deleted = await self.delete_where({USER_ID: user_id, PROVIDER_ID: provider_id})
        logger.debug(
            "Provider connections removed",
            user_id=user_id,
            provider_id=provider_id,
            deleted=deleted,
        )
        return deleted

    async def get_primary_connection(
        self,
        user_id: str,
        provider_id: str,
    ) -> Optional[Connection]:
        """Get the rank-1 connection to a provider, if any."""
        doc = await self.find_one(
            {USER_ID: user_id, PROVIDER_ID: provider_id, RANK: PRIMARY_RANK}
        )
        return self._converter.to_connection(doc)

    async def get_connection(
        self,
        user_id: str,
        provider_id: str,
        provider_user_id: str,
    ) -> Optional[Connection]:
        """Get a connection by its full key, if any."""
        doc = await self.find_one(self._key_filter(user_id, provider_id, provider_user_id))
        return self._converter.to_connection(doc)

    async def get_connections(
        self,
        user_id: str,
        selector: Union[None, str, ProviderUsers] = None,
    ) -> list[Connection]:
        """
        List a user's connections.

        Args:
            user_id: Owner of the connections
            selector: None for every provider, a provider id for one
                provider, or a mapping of provider id to acceptable
                provider user ids

        Returns:
            Connections ordered by rank (single provider) or by
            provider id then rank

        Raises:
            ValueError: if selector is an empty mapping
        """
        if selector is None:
            return await self.get_all_connections(user_id)
        if isinstance(selector, str):
            return await self.get_provider_connections(user_id, selector)
        if isinstance(selector, Mapping):
            return await self.find_connections_to_users(user_id, selector)
        raise TypeError(
            "get_connections() expects None, a provider id or a mapping, "
            f"got {type(selector).__name__}"
        )

    async def get_all_connections(self, user_id: str) -> list[Connection]:
        """Every connection of a user, by provider id then rank."""
        return await self._query({USER_ID: user_id}, BY_PROVIDER_THEN_RANK)

    async def get_provider_connections(
        self,
        user_id: str,
        provider_id: str,
    ) -> list[Connection]:
        """A user's connections to one provider, by rank."""
        return await self._query({USER_ID: user_id, PROVIDER_ID: provider_id}, BY_RANK)

    async def find_connections_to_users(
        self,
        user_id: str,
        provider_users: Optional[ProviderUsers],
    ) -> list[Connection]:
        """
        A user's connections to specific provider accounts.

        Provider groups are ORed together and ANDed with user_id.

        Raises:
            ValueError: if provider_users is None or empty
        """
        if not provider_users:
            raise ValueError("Unable to execute find: no provider users provided")

        groups = [
            {PROVIDER_ID: provider_id, PROVIDER_USER_ID: {"$in": _as_id_list(provider_user_ids)}}
            for provider_id, provider_user_ids in provider_users.items()
        ]
        return await self._query({USER_ID: user_id, "$or": groups}, BY_PROVIDER_THEN_RANK)

    async def get_user_ids(
        self,
        provider_id: str,
        provider_user_ids: Union[str, Iterable[str]],
    ) -> Union[list[str], set[str]]:
        """
        Find owners of provider accounts.

        Args:
            provider_id: External service identifier
            provider_user_ids: A single provider user id, or a collection of them

        Returns:
            A list of user ids for a single provider user id, or the
            set of distinct user ids for a collection
        """
        if isinstance(provider_user_ids, str):
            return await self.get_user_ids_for(provider_id, provider_user_ids)
        return await self.get_user_ids_for_any(provider_id, provider_user_ids)

    async def get_user_ids_for(self, provider_id: str, provider_user_id: str) -> list[str]:
        """User ids connected to exactly this provider account."""
        return await self.find_field(
            {PROVIDER_ID: provider_id, PROVIDER_USER_ID: provider_user_id},
            USER_ID,
        )

    async def get_user_ids_for_any(
        self,
        provider_id: str,
        provider_user_ids: Iterable[str],
    ) -> set[str]:
        """Distinct user ids connected to any of the provider accounts."""
        ids = list(provider_user_ids)
        if not ids:
            return set()
        user_ids = await self.find_field(
            {PROVIDER_ID: provider_id, PROVIDER_USER_ID: {"$in": ids}},
            USER_ID,
        )
        return set(user_ids)

    async def _query(self, filter: dict, sort: SortSpec) -> list[Connection]:
        docs = await self.find_many(filter, sort=sort)
        return [self._converter.to_connection(doc) for doc in docs]

    @staticmethod
    def _key_filter(user_id: str, provider_id: str, provider_user_id: str) -> dict:
        return {
            USER_ID: user_id,
            PROVIDER_ID: provider_id,
            PROVIDER_USER_ID: provider_user_id,
        }


def create_connection_repository(
    store: DocumentStore,
    settings: Optional[Settings] = None,
) -> ConnectionRepository:
    """
    Build a repository with the default converter.

    Credentials are encrypted when settings carry a token encryption key.
    """
    converter = ConnectionDataConverter(build_token_encryptor(settings))
    return ConnectionRepository(store, converter)
