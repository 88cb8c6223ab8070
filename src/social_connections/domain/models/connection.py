"""
Connection Domain Model

Represents a user's link to an account on an external provider.
The persistence layer never interprets provider credentials; it
only stores what the converter hands it.

SECURITY: access_token, secret and refresh_token are credentials.
They must not appear in logs or reprs.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


@dataclass(frozen=True)
class ConnectionKey:
    """
    Identity of a connection within a user's account.

    Attributes:
        provider_id: External service identifier (e.g. "twitter")
        provider_user_id: The user's identifier on that service
    """

    provider_id: str
    provider_user_id: str

    def __str__(self) -> str:
        return f"{self.provider_id}:{self.provider_user_id}"


@dataclass
class ConnectionData:
    """
    Flat snapshot of a connection's state.

    Attributes:
        provider_id: External service identifier
        provider_user_id: User identifier on the provider
        display_name: Name shown for the linked account
        profile_url: Public profile page
        image_url: Avatar URL
        access_token: OAuth access token
        secret: OAuth 1 token secret
        refresh_token: OAuth 2 refresh token
        expire_time: Access token expiry in epoch milliseconds
    """

    provider_id: str
    provider_user_id: str
    display_name: Optional[str] = None
    profile_url: Optional[str] = None
    image_url: Optional[str] = None
    access_token: Optional[str] = field(default=None, repr=False)
    secret: Optional[str] = field(default=None, repr=False)
    refresh_token: Optional[str] = field(default=None, repr=False)
    expire_time: Optional[int] = None

    def __post_init__(self) -> None:
        if not self.provider_id:
            raise ValueError("provider_id is required")
        if not self.provider_user_id:
            raise ValueError("provider_user_id is required")


class Connection:
    """
    A user's connection to a provider account.

    Wraps ConnectionData and exposes the identity key used by the
    repository. Provider API bindings live outside this package.

    rank is set on connections read from the store and is None on
    connections built by callers. It does not take part in equality.
    """

    def __init__(self, data: ConnectionData, rank: Optional[int] = None) -> None:
        self._data = data
        self._rank = rank

    @property
    def rank(self) -> Optional[int]:
        return self._rank

    @property
    def is_primary(self) -> bool:
        return self._rank == 1

    @property
    def key(self) -> ConnectionKey:
        return ConnectionKey(self._data.provider_id, self._data.provider_user_id)

    @property
    def provider_id(self) -> str:
        return self._data.provider_id

    @property
    def provider_user_id(self) -> str:
        return self._data.provider_user_id

    @property
    def display_name(self) -> Optional[str]:
        return self._data.display_name

    @property
    def profile_url(self) -> Optional[str]:
        return self._data.profile_url

    @property
    def image_url(self) -> Optional[str]:
        return self._data.image_url

    def has_expired(self, now: Optional[datetime] = None) -> bool:
        """
        Check whether the access token is past its expiry.

        Connections without an expire time never expire.
        """
        if self._data.expire_time is None:
            return False
        now = now or datetime.now(timezone.utc)
        return self._data.expire_time <= int(now.timestamp() * 1000)

    def to_data(self) -> ConnectionData:
        """Return a copy of the underlying connection data."""
        return ConnectionData(**vars(self._data))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Connection):
            return NotImplemented
        return self._data == other._data

    def __hash__(self) -> int:
        return hash(self.key)

    def __repr__(self) -> str:
        return f"<Connection(key='{self.key}', display_name={self.display_name!r})>"
