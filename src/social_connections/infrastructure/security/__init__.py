"""Credential protection package."""

from social_connections.infrastructure.security.token_encryptor import (
    FernetTokenEncryptor,
    NoOpTokenEncryptor,
    TokenDecryptionError,
    TokenEncryptor,
    build_token_encryptor,
)

__all__ = [
    "FernetTokenEncryptor",
    "NoOpTokenEncryptor",
    "TokenDecryptionError",
    "TokenEncryptor",
    "build_token_encryptor",
]
