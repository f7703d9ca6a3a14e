"""Text similarity shared by the secondary search and the discrepancy detector."""

from __future__ import annotations

import re
import unicodedata
from typing import Final

_PLACEHOLDER_NAMES: Final[frozenset[str]] = frozenset(
    {
        "no",
        "yes",
        "n/a",
        "na",
        "null",
        "none",
        "ea",
        "each",
        "item",
        "product",
        "misc",
        "other",
        "unknown",
        "tbd",
    }
)
_GENERIC_SUBSTRINGS: Final[tuple[str, ...]] = (
    "open item",
    "open ",
    "misc ",
    "unknown",
    "assorted",
    "generic",
    "store brand",
    "house brand",
    "private label",
    "sample",
    "test",
    "placeholder",
    "tbd",
    "n/a",
)
_GENERIC_SINGLE_WORDS: Final[frozenset[str]] = frozenset(
    {
        "bread",
        "milk",
        "eggs",
        "butter",
        "cheese",
        "water",
        "juice",
        "coffee",
        "tea",
        "sugar",
        "salt",
        "flour",
        "rice",
        "pasta",
        "chicken",
        "beef",
        "pork",
        "fish",
        "salad",
        "soup",
        "pizza",
    }
)
_GENERIC_MIN_LENGTH: Final[int] = 8

EXACT_SCORE: Final[float] = 1.0
CONTAINMENT_SCORE: Final[float] = 0.8

_SIZE_TOKEN = re.compile(
    r"\b\d+(?:[.,]\d+)?\s*(?:fl\.?\s*oz|oz|lbs?|kg|g|ml|l|ct|pk|pack|count)\b",
    re.IGNORECASE,
)


def _clean(value: str | None) -> str:
    if value is None:
        return ""
    return value.strip().lower()


def similarity(left: str | None, right: str | None) -> float:
    """Score two strings in ``[0, 1]``.

    Exact match (ignoring case and surrounding whitespace) scores 1.0, containment
    in either direction 0.8, otherwise the share of common words relative to the
    longer word list.
    """

    a = _clean(left)
    b = _clean(right)
    if not a or not b:
        return 0.0
    if a == b:
        return EXACT_SCORE
    if a in b or b in a:
        return CONTAINMENT_SCORE

    words_a = a.split()
    words_b = b.split()
    total = max(len(words_a), len(words_b))
    if total == 0:
        return 0.0
    common = set(words_a) & set(words_b)
    return len(common) / total


def fuzzy_match(left: str | None, right: str | None, *, threshold: float = 0.5) -> bool:
    return similarity(left, right) >= threshold


def contains_text(haystack: str | None, needle: str | None) -> bool:
    """Case-insensitive containment; blank values never contain or are contained."""

    a = _clean(haystack)
    b = _clean(needle)
    if not a or not b:
        return False
    return b in a


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def is_generic_name(name: str | None) -> bool:
    """Whether ``name`` is too generic for name-only matching across a large catalog."""

    normalized = _clean(name)
    if not normalized:
        return True
    if len(normalized) < _GENERIC_MIN_LENGTH:
        return True
    if normalized in _PLACEHOLDER_NAMES:
        return True
    if any(pattern in normalized for pattern in _GENERIC_SUBSTRINGS):
        return True
    words = normalized.split()
    return len(words) == 1 and words[0] in _GENERIC_SINGLE_WORDS


def basic_name_normalizer(name: str) -> str:
    """Offline product-name cleanup.

    Drops size tokens (``"16 oz"``, ``"500ml"``), punctuation and repeated
    whitespace. Used when no remote normalizer is configured.
    """

    text = unicodedata.normalize("NFKC", name)
    text = _SIZE_TOKEN.sub(" ", text)
    text = text.casefold()
    text = "".join(" " if unicodedata.category(ch).startswith("P") else ch for ch in text)
    return " ".join(text.split())
