"""Port for the product-name normalization collaborator."""

from __future__ import annotations

from collections.abc import Callable

type NormalizeProductName = Callable[[str], str]
"""Return a cleaned-up product name; may raise or time out."""


class TextNormalizationError(RuntimeError):
    """Raised by name normalizers when the provider cannot produce a result."""
