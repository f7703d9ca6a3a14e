"""Settings for outbound HTTP services."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Final

import httpx

if TYPE_CHECKING:
    from collections.abc import Mapping

ShouldCacheHook = Callable[[object], bool]

RETRYABLE_STATUSES: Final[frozenset[int]] = frozenset({408, 429, 500, 502, 503, 504})
RETRYABLE_ERRORS: Final[tuple[type[httpx.HTTPError], ...]] = (
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.RemoteProtocolError,
)
IN_MEMORY_CACHE: Final[str] = ":memory:"


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    """Retry budget for one service. ``total=0`` sends each request once."""

    total: int = 2
    backoff_factor: float = 0.5
    max_backoff_wait: float = 10.0
    backoff_jitter: float = 1.0
    # includes POST for chat completions
    methods: frozenset[str] = frozenset({"GET", "POST"})
    statuses: frozenset[int] = RETRYABLE_STATUSES
    errors: tuple[type[httpx.HTTPError], ...] = RETRYABLE_ERRORS


@dataclass(slots=True, frozen=True)
class CacheConfig:
    """Response cache kept in hishel's sqlite storage.

    ``key_on_body`` adds the request body to the cache key, which POST
    endpoints need. ``should_cache`` receives the decoded JSON body; a
    response is stored only when it returns true.
    """

    enabled: bool = True
    database_path: str = IN_MEMORY_CACHE
    default_ttl_seconds: float | None = None
    refresh_ttl_on_access: bool = True
    key_on_body: bool = False
    should_cache: ShouldCacheHook | None = None


@dataclass(slots=True, frozen=True)
class ResilienceConfig:
    name: str
    base_url: str | None = None
    timeout_seconds: float = 30.0
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    cache: CacheConfig | None = None
    default_headers: Mapping[str, str] | None = None

    def with_headers(self, headers: Mapping[str, str]) -> ResilienceConfig:
        """Copy with ``headers`` merged over the default headers."""

        return replace(self, default_headers={**(self.default_headers or {}), **headers})
