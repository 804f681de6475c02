"""
Application configuration using Pydantic settings.

Configuration comes from environment variables with placeholder defaults.
Call initialize() once at process start; read it back with get_settings().
"""

from .errors import ConfigError, ConfigNotInitializedError
from .settings import (
    Settings,
    get_server_address,
    get_settings,
    initialize,
    is_development,
    is_initialized,
    is_production,
)

__all__ = [
    "ConfigError",
    "ConfigNotInitializedError",
    "Settings",
    "get_server_address",
    "get_settings",
    "initialize",
    "is_development",
    "is_initialized",
    "is_production",
]
