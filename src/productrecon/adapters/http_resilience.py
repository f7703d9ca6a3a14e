from __future__ import annotations

import json
from typing import TYPE_CHECKING, TypedDict, Unpack

import httpx
from hishel import FilterPolicy, SyncSqliteStorage
from hishel import Response as CachedResponse
from hishel._policies import BaseFilter
from hishel.httpx import SyncCacheClient
from httpx_retries import Retry, RetryTransport

from productrecon import __version__

if TYPE_CHECKING:
    from httpx._client import UseClientDefault
    from httpx._types import (
        HeaderTypes,
        QueryParamTypes,
        RequestContent,
        RequestExtensions,
        TimeoutTypes,
        URLTypes,
    )

    from productrecon.config.http_resilience import (
        CacheConfig,
        ResilienceConfig,
        RetryPolicy,
        ShouldCacheHook,
    )

BODY_KEY_EXTENSION = "hishel_body_key"


class RequestOptions(TypedDict, total=False):
    content: RequestContent | None
    json: object
    params: QueryParamTypes | None
    headers: HeaderTypes | None
    timeout: TimeoutTypes | UseClientDefault
    extensions: RequestExtensions | None


class ClientOptions(TypedDict, total=False):
    base_url: str
    timeout: TimeoutTypes
    headers: HeaderTypes
    transport: httpx.BaseTransport


def build_retry(policy: RetryPolicy) -> Retry:
    return Retry(
        total=policy.total,
        backoff_factor=policy.backoff_factor,
        max_backoff_wait=policy.max_backoff_wait,
        backoff_jitter=policy.backoff_jitter,
        respect_retry_after_header=True,
        allowed_methods=sorted(policy.methods),
        status_forcelist=sorted(policy.statuses),
        retry_on_exceptions=policy.errors,
    )


class _JsonPayloadFilter(BaseFilter[CachedResponse]):
    """Store only responses whose JSON body satisfies the predicate."""

    def __init__(self, predicate: ShouldCacheHook) -> None:
        self._predicate = predicate

    def needs_body(self) -> bool:
        return True

    def apply(self, item: CachedResponse, body: bytes | None) -> bool:  # noqa: ARG002
        if body is None:
            return False
        try:
            payload = json.loads(body)
        except (UnicodeDecodeError, json.JSONDecodeError):
            return False
        return bool(self._predicate(payload))


def build_cache(
    config: CacheConfig | None,
) -> tuple[SyncSqliteStorage | None, FilterPolicy | None]:
    """Return hishel storage and policy for ``config``, or ``(None, None)`` when off.

    The policy is always a ``FilterPolicy``, which lets POST responses be stored.
    """

    if config is None or not config.enabled:
        return None, None

    storage = SyncSqliteStorage(
        database_path=config.database_path,
        default_ttl=config.default_ttl_seconds,
        refresh_ttl_on_access=config.refresh_ttl_on_access,
    )
    response_filters: list[BaseFilter[CachedResponse]] = []
    if config.should_cache is not None:
        response_filters.append(_JsonPayloadFilter(config.should_cache))
    return storage, FilterPolicy(response_filters=response_filters)


class ResilientClient:
    """Synchronous ``httpx.Client`` that retries through ``httpx-retries``.

    With a cache configured the client is a hishel ``SyncCacheClient`` sitting
    above the retry transport, so only the final response of a retried
    request is considered for storage. ``transport`` replaces the network
    layer underneath, which lets tests plug in ``httpx.MockTransport``.
    """

    def __init__(
        self,
        config: ResilienceConfig,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.config = config
        retry_transport = RetryTransport(transport=transport, retry=build_retry(config.retry))

        client_kwargs: ClientOptions = {
            "timeout": config.timeout_seconds,
            "transport": retry_transport,
            "headers": {
                "User-Agent": f"productrecon/{__version__} ({config.name})",
                **(config.default_headers or {}),
            },
        }
        if config.base_url is not None:
            client_kwargs["base_url"] = config.base_url

        storage, policy = build_cache(config.cache)
        self._client: httpx.Client
        if storage is not None:
            self._client = SyncCacheClient(**client_kwargs, storage=storage, policy=policy)
        else:
            self._client = httpx.Client(**client_kwargs)
        cache = config.cache
        self._key_on_body = storage is not None and cache is not None and cache.key_on_body

    def __enter__(self) -> ResilientClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def request(
        self,
        method: str,
        url: URLTypes,
        **kwargs: Unpack[RequestOptions],
    ) -> httpx.Response:
        if self._key_on_body:
            kwargs["extensions"] = {**(kwargs.get("extensions") or {}), BODY_KEY_EXTENSION: True}
        return self._client.request(method, url, **kwargs)

    def get(self, url: URLTypes, **kwargs: Unpack[RequestOptions]) -> httpx.Response:
        return self.request("GET", url, **kwargs)

    def post(self, url: URLTypes, **kwargs: Unpack[RequestOptions]) -> httpx.Response:
        return self.request("POST", url, **kwargs)
