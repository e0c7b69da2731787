"""Application configuration helpers."""

from __future__ import annotations

from .env import env_bool, env_float, env_int, env_str
from .errors import ConfigurationError
from .http_resilience import NO_RETRY, CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .pokeapi import PokeApiConfig, get_pokeapi_config
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config
from .sync import SyncConfig, get_sync_config

__all__ = [
    "NO_RETRY",
    "CacheConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "PokeApiConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "SyncConfig",
    "configure_logging",
    "env_bool",
    "env_float",
    "env_int",
    "env_str",
    "get_database_config",
    "get_pokeapi_config",
    "get_storage_config",
    "get_sync_config",
]
