"""
Configuration Module

Provides centralized configuration management with:
- Environment-based settings loading
- Secure handling of secrets
"""

from social_connections.config.settings import MongoSettings, Settings, get_settings

__all__ = ["MongoSettings", "Settings", "get_settings"]
