"""Configuration for the remote product-name normalizer."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env, optional_float_env, require_env_var
from .http_resilience import IN_MEMORY_CACHE, CacheConfig, ResilienceConfig

TEXT_NORMALIZER_BASE_URL = "https://api.openai.com/v1/"
TEXT_NORMALIZER_MODEL = "gpt-3.5-turbo"
TEXT_NORMALIZER_TIMEOUT_SECONDS = 10.0
TEXT_NORMALIZER_CACHE_TTL_SECONDS = 3600.0
TEXT_NORMALIZER_MAX_TOKENS = 50


@dataclass(frozen=True)
class TextNormalizerConfig:
    """Holds chat-completion endpoint settings for name normalization."""

    api_key: str
    model: str
    resilience: ResilienceConfig
    max_tokens: int = TEXT_NORMALIZER_MAX_TOKENS
    temperature: float = 0.3


def name_cache_config(
    ttl_seconds: float = TEXT_NORMALIZER_CACHE_TTL_SECONDS,
    database_path: str = IN_MEMORY_CACHE,
) -> CacheConfig | None:
    """Cache for normalized names, keyed on the request body; ``None`` when TTL <= 0."""

    if ttl_seconds <= 0:
        return None
    return CacheConfig(
        database_path=database_path,
        default_ttl_seconds=ttl_seconds,
        key_on_body=True,
    )


def get_text_normalizer_config(
    *,
    resilience: ResilienceConfig | None = None,
) -> TextNormalizerConfig:
    api_key = require_env_var("TEXT_NORMALIZER_API_KEY")
    return TextNormalizerConfig(
        api_key=api_key,
        model=optional_env("TEXT_NORMALIZER_MODEL", TEXT_NORMALIZER_MODEL),
        resilience=resilience
        or ResilienceConfig(
            name="text-normalizer",
            base_url=optional_env("TEXT_NORMALIZER_BASE_URL", TEXT_NORMALIZER_BASE_URL),
            timeout_seconds=optional_float_env(
                "TEXT_NORMALIZER_TIMEOUT_SECONDS", TEXT_NORMALIZER_TIMEOUT_SECONDS
            ),
            cache=name_cache_config(
                optional_float_env(
                    "TEXT_NORMALIZER_CACHE_TTL_SECONDS", TEXT_NORMALIZER_CACHE_TTL_SECONDS
                ),
                optional_env("TEXT_NORMALIZER_CACHE_PATH", IN_MEMORY_CACHE),
            ),
        ),
    )
