"""HTTP client for an OpenAI-compatible chat-completion endpoint."""

from __future__ import annotations

from dataclasses import replace
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from productrecon.adapters.http_resilience import ResilientClient
from productrecon.domain.ports import TextNormalizationError

from .schema import ChatCompletionRequest, ChatCompletionResponse, ChatMessage

if TYPE_CHECKING:
    from productrecon.config.text_normalizer import TextNormalizerConfig

log = getLogger(__name__)

CHAT_COMPLETIONS_PATH = "chat/completions"
SYSTEM_PROMPT = (
    "You are a product name normalizer. Normalize product names by: "
    "1) Removing size/quantity indicators (oz, ml, lb, g, etc), "
    "2) Standardizing punctuation and spacing, "
    "3) Keeping brand names intact, "
    "4) Using title case. "
    "Return ONLY the normalized name, no explanations."
)


def _should_cache_completion(payload: object) -> bool:
    try:
        response = ChatCompletionResponse.model_validate(payload)
    except ValidationError:
        return False
    return response.first_content() is not None


class ChatCompletionNameNormalizer:
    """Normalize product names through a chat-completion model.

    Calls are synchronous. When the resilience config carries a cache, hishel
    stores each successful completion keyed on the request body, so repeated
    names within the TTL are answered locally. Any transport, HTTP or payload
    failure raises ``TextNormalizationError``; the matching engine
    treats that as "strategy unavailable" for the record at hand.
    """

    def __init__(
        self,
        config: TextNormalizerConfig,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.config = config
        resilience = config.resilience.with_headers({"Authorization": f"Bearer {config.api_key}"})
        if resilience.cache is not None and resilience.cache.should_cache is None:
            cache = replace(resilience.cache, should_cache=_should_cache_completion)
            resilience = replace(resilience, cache=cache)
        self._client = ResilientClient(resilience, transport=transport)

    def __enter__(self) -> ChatCompletionNameNormalizer:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def __call__(self, name: str) -> str:
        if not name or not name.strip():
            return name

        normalized = self._request_normalized_name(name)
        log.debug("Normalized %r to %r", name, normalized)
        return normalized

    def _request_normalized_name(self, name: str) -> str:
        request = ChatCompletionRequest(
            model=self.config.model,
            messages=[
                ChatMessage(role="system", content=SYSTEM_PROMPT),
                ChatMessage(role="user", content=f"Normalize: {name}"),
            ],
            max_tokens=self.config.max_tokens,
            temperature=self.config.temperature,
        )
        try:
            response = self._client.post(
                CHAT_COMPLETIONS_PATH,
                json=request.model_dump(mode="json"),
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            log.warning(
                "Name normalizer returned HTTP %s for %r",
                exc.response.status_code,
                name,
            )
            raise TextNormalizationError(
                f"Name normalizer returned HTTP {exc.response.status_code}"
            ) from exc
        except httpx.HTTPError as exc:
            log.warning("Name normalizer request failed for %r: %s", name, exc)
            raise TextNormalizationError(f"Name normalizer request failed: {exc}") from exc

        try:
            payload = ChatCompletionResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise TextNormalizationError("Unexpected name normalizer response payload") from exc

        content = payload.first_content()
        if content is None:
            raise TextNormalizationError("Name normalizer response contained no content")
        return content

