"""Chat-completion backed product-name normalizer."""

from __future__ import annotations

from .client import ChatCompletionNameNormalizer

__all__ = ["ChatCompletionNameNormalizer"]
