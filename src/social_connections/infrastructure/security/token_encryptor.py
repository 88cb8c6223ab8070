"""
Provider Credential Encryption

Symmetric encryption of access tokens, secrets and refresh tokens
before they reach the document store.

SECURITY: Ciphertext is safe to store; plaintext and the key are not
safe to log.
"""

from abc import ABC, abstractmethod
from typing import Optional

from cryptography.fernet import Fernet, InvalidToken

from social_connections.config import Settings


class TokenDecryptionError(Exception):
    """Stored credential could not be decrypted with the configured key."""


class TokenEncryptor(ABC):
    """Encrypts and decrypts credential strings."""

    @abstractmethod
    def encrypt(self, value: str) -> str:
        pass

    @abstractmethod
    def decrypt(self, value: str) -> str:
        pass


class NoOpTokenEncryptor(TokenEncryptor):
    """Stores credentials as given."""

    def encrypt(self, value: str) -> str:
        return value

    def decrypt(self, value: str) -> str:
        return value


class FernetTokenEncryptor(TokenEncryptor):
    """Encrypt/decrypt credentials using Fernet symmetric encryption."""

    def __init__(self, key: str | bytes) -> None:
        """
        Args:
            key: urlsafe base64-encoded 32-byte key (Fernet.generate_key())

        Raises:
            ValueError: if the key is malformed
        """
        self._fernet = Fernet(key)

    def encrypt(self, value: str) -> str:
        return self._fernet.encrypt(value.encode("utf-8")).decode("ascii")

    def decrypt(self, value: str) -> str:
        try:
            return self._fernet.decrypt(value.encode("ascii")).decode("utf-8")
        except InvalidToken as e:
            raise TokenDecryptionError("Stored credential failed decryption") from e


def build_token_encryptor(settings: Optional[Settings] = None) -> TokenEncryptor:
    """
    Create the encryptor configured in settings.

    Returns NoOpTokenEncryptor when no key is configured.
    """
    if settings is None or not settings.encryption_enabled:
        return NoOpTokenEncryptor()
    return FernetTokenEncryptor(settings.token_encryption_key.get_secret_value())
