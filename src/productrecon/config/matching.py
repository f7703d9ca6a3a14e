"""Tuned matching constants.

The values are product-tuned heuristics. They live here so thresholds can be
adjusted without touching the cascade or the secondary strategies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final


@dataclass(frozen=True, slots=True, kw_only=True)
class MatchingPolicy:
    """Confidence levels, thresholds and weights used by the matching engine."""

    # primary cascade
    verified_code_confidence: float = 1.0
    exact_name_confidence: float = 0.85
    min_code_lookup_length: int = 8
    legacy_code_length: int = 13

    # secondary search
    partial_code_length: int = 8
    partial_code_confidence: float = 0.75
    name_brand_confidence: float = 0.85
    name_only_min_similarity: float = 0.70
    name_only_scale: float = 0.85
    multi_field_brand_weight: float = 0.30
    multi_field_category_weight: float = 0.25
    multi_field_quantity_weight: float = 0.20
    multi_field_name_weight: float = 0.25
    multi_field_min_score: float = 0.85
    secondary_confidence_ceiling: float = 0.99

    # discrepancy policy
    fuzzy_match_threshold: float = 0.5
    discrepancy_penalty: float = 0.1
    discrepancy_confidence_floor: float = 0.1

    # quantity comparison
    quantity_tolerance: float = 0.05

    def is_verified(self, confidence: float) -> bool:
        return confidence >= self.verified_code_confidence


DEFAULT_MATCHING_POLICY: Final[MatchingPolicy] = MatchingPolicy()
