"""
Connection Document Model

Persisted shape of a connection record in the document store.
Field names on disk are camelCase.

Collection: connections (configurable)
Unique index: (userId, providerId, providerUserId)
"""

from dataclasses import dataclass, field
from typing import Any, Optional


# Document field names
USER_ID = "userId"
PROVIDER_ID = "providerId"
PROVIDER_USER_ID = "providerUserId"
RANK = "rank"

# Fields identifying a record; everything else may be replaced by update()
IDENTITY_FIELDS: tuple[str, ...] = (USER_ID, PROVIDER_ID, PROVIDER_USER_ID)

_OPTIONAL_FIELDS: dict[str, str] = {
    "display_name": "displayName",
    "profile_url": "profileUrl",
    "image_url": "imageUrl",
    "access_token": "accessToken",
    "secret": "secret",
    "refresh_token": "refreshToken",
    "expire_time": "expireTime",
}


@dataclass
class ConnectionDocument:
    """
    Connection record as stored in the collection.

    user_id and rank are assigned by the repository, not the
    converter; a freshly converted document carries neither.
    """

    provider_id: str
    provider_user_id: str
    user_id: Optional[str] = None
    rank: Optional[int] = None
    display_name: Optional[str] = None
    profile_url: Optional[str] = None
    image_url: Optional[str] = None
    access_token: Optional[str] = field(default=None, repr=False)
    secret: Optional[str] = field(default=None, repr=False)
    refresh_token: Optional[str] = field(default=None, repr=False)
    expire_time: Optional[int] = None

    def to_document(self) -> dict[str, Any]:
        """Serialize to the stored dictionary shape."""
        doc: dict[str, Any] = {
            USER_ID: self.user_id,
            PROVIDER_ID: self.provider_id,
            PROVIDER_USER_ID: self.provider_user_id,
        }
        if self.rank is not None:
            doc[RANK] = self.rank
        for attr, name in _OPTIONAL_FIELDS.items():
            doc[name] = getattr(self, attr)
        return doc

    def provider_fields(self) -> dict[str, Any]:
        """Stored fields outside the identity key and rank."""
        return {name: getattr(self, attr) for attr, name in _OPTIONAL_FIELDS.items()}

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "ConnectionDocument":
        """Build from a stored dictionary, ignoring unknown keys such as _id."""
        return cls(
            user_id=doc.get(USER_ID),
            provider_id=doc[PROVIDER_ID],
            provider_user_id=doc[PROVIDER_USER_ID],
            rank=doc.get(RANK),
            **{attr: doc.get(name) for attr, name in _OPTIONAL_FIELDS.items()},
        )

    def __repr__(self) -> str:
        return (
            f"<ConnectionDocument(user_id={self.user_id!r}, "
            f"provider_id={self.provider_id!r}, "
            f"provider_user_id={self.provider_user_id!r}, rank={self.rank})>"
        )
