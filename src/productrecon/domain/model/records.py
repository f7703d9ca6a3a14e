"""Imported and catalog product records.

Both record types are plain values. The engine never mutates them; callers
own their storage and lifetime.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, kw_only=True)
class ImportedRecord:
    """Externally supplied product awaiting identity resolution."""

    record_id: str
    code: str = ""
    name: str | None = None
    brand: str | None = None
    category: str | None = None
    allergens: str | None = None
    quantity: float | None = None
    unit: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class CandidateRecord:
    """Reference-catalog entry.

    ``quantity`` is free text as stored in the catalog (``"16 oz"``, ``"500ml"``).
    ``normalized_code`` is optional; index builders fall back to normalizing
    ``code`` when it is missing.
    """

    candidate_id: str
    code: str = ""
    normalized_code: str | None = None
    name: str | None = None
    brand: str | None = None
    categories: str | None = None
    allergens: str | None = None
    quantity: str | None = None
