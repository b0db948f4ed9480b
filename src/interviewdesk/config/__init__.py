"""Application configuration helpers."""

from __future__ import annotations

from .api import DEFAULT_INTERVIEWS_API_URL, ApiConfig, get_api_config
from .env import optional_env_var, require_env_vars
from .errors import ConfigurationError, InvalidConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig
from .logging import configure_logging
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config

__all__ = [
    "DEFAULT_INTERVIEWS_API_URL",
    "ApiConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "InvalidConfigurationError",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "StorageConfig",
    "configure_logging",
    "get_api_config",
    "get_database_config",
    "get_storage_config",
    "optional_env_var",
    "require_env_vars",
]
