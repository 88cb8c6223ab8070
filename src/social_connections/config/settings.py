"""
Social Connections Settings

Configuration management using Pydantic Settings.
All sensitive values are loaded from environment variables.

SECURITY: Never log or expose settings containing secrets.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class MongoSettings(BaseSettings):
    """MongoDB document store configuration."""

    model_config = SettingsConfigDict(env_prefix="SOCIAL_MONGO_")

    uri: SecretStr = Field(
        default=SecretStr("mongodb://localhost:27017"),
        description="MongoDB connection URI (may contain credentials)",
    )
    database: str = Field(default="social", description="Database name")
    collection: str = Field(default="connections", description="Connection collection name")
    max_pool_size: int = Field(default=50, ge=1, le=500, description="Client connection pool size")
    server_selection_timeout_ms: int = Field(
        default=5000,
        ge=100,
        le=60000,
        description="How long to wait for a suitable server",
    )
    create_indexes: bool = Field(
        default=True,
        description="Create the connection indexes on startup",
    )


class Settings(BaseSettings):
    """
    Main application settings.

    All configuration is loaded from environment variables with SOCIAL_ prefix.
    Sensitive values use SecretStr to prevent accidental logging.

    Usage:
        settings = get_settings()
        collection_name = settings.mongo.collection
    """

    model_config = SettingsConfigDict(
        env_prefix="SOCIAL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    env: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment"
    )
    debug: bool = Field(default=False, description="Debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level"
    )

    # Fernet key for provider credentials at rest; empty disables encryption
    token_encryption_key: SecretStr = Field(
        default=SecretStr(""),
        description="urlsafe base64 Fernet key for access tokens and secrets",
    )

    mongo: MongoSettings = Field(default_factory=MongoSettings)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        """Accept lowercase level names from the environment."""
        if isinstance(v, str):
            return v.upper()
        return v

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.env == "production"

    @property
    def encryption_enabled(self) -> bool:
        """Whether provider credentials are encrypted before storage."""
        return bool(self.token_encryption_key.get_secret_value())


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses LRU cache to ensure settings are only loaded once.
    For testing, construct Settings directly or clear the cache.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
