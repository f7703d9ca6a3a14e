"""Identity resolution of imported product records against a reference catalog.

Stages, leaves first:
1) identifier normalization and checksum validation (``identifiers``)
2) quantity normalization (``quantity``)
3) primary match cascade over pre-built indexes (``cascade``)
4) fallback strategies when the cascade is not certain (``secondary``)
5) field discrepancy detection and status policy (``discrepancy``)

``engine.ComparisonEngine`` composes them into one ``MatchResult`` per record.
"""

from __future__ import annotations

from .cascade import PrimaryMatch, match_primary
from .discrepancy import apply_discrepancy_policy, compare_fields
from .engine import ComparisonEngine, compare
from .identifiers import detect_type, is_valid_barcode, normalize_code, parse_identifier
from .indexes import CandidateIndexes, build_candidate_indexes, name_key
from .quantity import Quantity, normalize_quantity, parse_quantity_text, quantity_matches
from .secondary import SecondaryMatch, perform_secondary_search
from .similarity import basic_name_normalizer, fuzzy_match, is_generic_name, similarity

__all__ = [
    "CandidateIndexes",
    "ComparisonEngine",
    "PrimaryMatch",
    "Quantity",
    "SecondaryMatch",
    "apply_discrepancy_policy",
    "basic_name_normalizer",
    "build_candidate_indexes",
    "compare",
    "compare_fields",
    "detect_type",
    "fuzzy_match",
    "is_generic_name",
    "is_valid_barcode",
    "match_primary",
    "name_key",
    "normalize_code",
    "normalize_quantity",
    "parse_identifier",
    "parse_quantity_text",
    "perform_secondary_search",
    "quantity_matches",
    "similarity",
]
