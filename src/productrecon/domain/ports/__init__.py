"""Ports consumed by the matching domain."""

from __future__ import annotations

from .progress import ProgressReporter
from .text_normalization import NormalizeProductName, TextNormalizationError

__all__ = [
    "NormalizeProductName",
    "ProgressReporter",
    "TextNormalizationError",
]
