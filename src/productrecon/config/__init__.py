"""Application configuration helpers."""

from __future__ import annotations

from .env import (
    optional_bool_env,
    optional_env,
    optional_float_env,
    require_env_var,
    require_env_vars,
)
from .errors import ConfigurationError, InvalidConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .matching import DEFAULT_MATCHING_POLICY, MatchingPolicy
from .storage import DatabaseConfig, catalog_data_dir, default_database_uri, get_database_config
from .text_normalizer import TextNormalizerConfig, get_text_normalizer_config, name_cache_config

__all__ = [
    "DEFAULT_MATCHING_POLICY",
    "CacheConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "InvalidConfigurationError",
    "MatchingPolicy",
    "MissingConfigurationError",
    "ResilienceConfig",
    "RetryPolicy",
    "TextNormalizerConfig",
    "catalog_data_dir",
    "configure_logging",
    "default_database_uri",
    "get_database_config",
    "get_text_normalizer_config",
    "name_cache_config",
    "optional_bool_env",
    "optional_env",
    "optional_float_env",
    "require_env_var",
    "require_env_vars",
]
