"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class IdentifierKind(StrEnum):
    UPC_A = "upc_a"
    UPC_E = "upc_e"
    EAN_8 = "ean_8"
    EAN_13 = "ean_13"
    GTIN_14 = "gtin_14"
    ISBN_10 = "isbn_10"
    ISBN_13 = "isbn_13"
    SKU = "sku"
    UNKNOWN = "unknown"


class MatchStatus(StrEnum):
    """Outcome of comparing one imported record against the catalog."""

    MATCHED = "matched"
    UNMATCHED = "unmatched"
    DISCREPANCY = "discrepancy"
    # Never emitted by the engine; available to callers that post-process results.
    MULTIPLE_MATCHES = "multiple_matches"
    ERROR = "error"


class MatchMethod(StrEnum):
    # primary cascade
    CODE_EXACT = "code-exact"
    CODE_LEGACY = "code-legacy"
    CODE_RAW = "code-raw"
    NAME_EXACT = "name-exact"

    # secondary search
    CODE_PARTIAL = "code-partial"
    NAME_NORMALIZED_BRAND = "name-normalized-brand"
    NAME_NORMALIZED = "name-normalized"
    MULTI_FIELD = "multi-field"

    NONE = "none"


class SecondaryStrategy(StrEnum):
    PARTIAL_CODE = "partial-code"
    NORMALIZED_NAME = "normalized-name"
    MULTI_FIELD = "multi-field"


class DiscrepancyField(StrEnum):
    """Field kinds compared by the discrepancy detector, in reporting order."""

    NAME = "name"
    BRAND = "brand"
    CATEGORY = "category"
    ALLERGENS = "allergens"


class QuantityDimension(StrEnum):
    MASS = "mass"
    VOLUME = "volume"
    COUNT = "count"
    UNKNOWN = "unknown"
