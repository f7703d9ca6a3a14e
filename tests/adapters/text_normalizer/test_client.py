from __future__ import annotations

import json
from collections.abc import Callable

import httpx
import pytest

from productrecon.adapters.text_normalizer import ChatCompletionNameNormalizer
from productrecon.adapters.text_normalizer.client import SYSTEM_PROMPT
from productrecon.config import (
    ResilienceConfig,
    RetryPolicy,
    TextNormalizerConfig,
    name_cache_config,
)
from productrecon.domain.ports import TextNormalizationError


def _config(*, cache_ttl_seconds: float = 60.0) -> TextNormalizerConfig:
    return TextNormalizerConfig(
        api_key="secret",
        model="test-model",
        resilience=ResilienceConfig(
            name="text-normalizer-test",
            base_url="https://llm.test/v1/",
            retry=RetryPolicy(total=0),
            cache=name_cache_config(cache_ttl_seconds),
        ),
    )


def _completion(content: str | None) -> dict[str, object]:
    return {"choices": [{"index": 0, "message": {"role": "assistant", "content": content}}]}


def _normalizer(
    handler: Callable[[httpx.Request], httpx.Response],
    *,
    cache_ttl_seconds: float = 60.0,
) -> ChatCompletionNameNormalizer:
    config = _config(cache_ttl_seconds=cache_ttl_seconds)
    return ChatCompletionNameNormalizer(config, transport=httpx.MockTransport(handler))


def test_posts_chat_completion_and_returns_content() -> None:
    captured: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        captured.append(request)
        return httpx.Response(200, json=_completion("  Acme Crunchy Peanut Butter \n"))

    with _normalizer(handler) as normalize:
        result = normalize("ACME crunchy peanut-butter 16oz")

    assert result == "Acme Crunchy Peanut Butter"
    request = captured[0]
    assert request.method == "POST"
    assert request.url == httpx.URL("https://llm.test/v1/chat/completions")
    assert request.headers["Authorization"] == "Bearer secret"
    body = json.loads(request.content)
    assert body["model"] == "test-model"
    assert body["max_tokens"] == 50
    assert body["temperature"] == pytest.approx(0.3)
    assert body["messages"][0] == {"role": "system", "content": SYSTEM_PROMPT}
    assert body["messages"][1]["content"] == "Normalize: ACME crunchy peanut-butter 16oz"


def test_results_are_cached_per_name() -> None:
    calls: list[str] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(json.loads(request.content)["messages"][1]["content"])
        return httpx.Response(200, json=_completion("Trail Mix"))

    with _normalizer(handler) as normalize:
        assert normalize("trail mix 8oz") == "Trail Mix"
        assert normalize("trail mix 8oz") == "Trail Mix"
        assert normalize("TRAIL MIX") == "Trail Mix"

    assert calls == ["Normalize: trail mix 8oz", "Normalize: TRAIL MIX"]


def test_blank_names_skip_the_request() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    with _normalizer(handler) as normalize:
        assert normalize("") == ""
        assert normalize("   ") == "   "


def test_http_error_raises_normalization_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"error": {"message": "bad key"}})

    with _normalizer(handler) as normalize, pytest.raises(TextNormalizationError, match="HTTP 401"):
        normalize("Trail Mix")


def test_transport_error_raises_normalization_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with (
        _normalizer(handler) as normalize,
        pytest.raises(TextNormalizationError, match="request failed"),
    ):
        normalize("Trail Mix")


@pytest.mark.parametrize(
    "payload",
    [
        _completion(None),
        _completion("   "),
        {"choices": []},
        {"choices": "nope"},
    ],
)
def test_unusable_payload_raises_normalization_error(payload: dict[str, object]) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=payload)

    with _normalizer(handler) as normalize, pytest.raises(TextNormalizationError):
        normalize("Trail Mix")


def test_failed_completions_are_not_cached() -> None:
    replies = [_completion("   "), _completion("Trail Mix")]
    calls: list[int] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(1)
        return httpx.Response(200, json=replies[len(calls) - 1])

    with _normalizer(handler) as normalize:
        with pytest.raises(TextNormalizationError):
            normalize("trail mix")
        assert normalize("trail mix") == "Trail Mix"

    assert len(calls) == 2


def test_zero_ttl_disables_the_cache() -> None:
    calls: list[int] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(1)
        return httpx.Response(200, json=_completion("Trail Mix"))

    with _normalizer(handler, cache_ttl_seconds=0) as normalize:
        normalize("trail mix")
        normalize("trail mix")

    assert len(calls) == 2
