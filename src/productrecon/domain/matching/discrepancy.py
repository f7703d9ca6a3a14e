"""Field-level discrepancy detection and its effect on match status."""

from __future__ import annotations

from typing import TYPE_CHECKING

from productrecon.config.matching import DEFAULT_MATCHING_POLICY
from productrecon.domain.model import DiscrepancyField, FieldDiscrepancy, MatchStatus

from .similarity import contains_text, fuzzy_match, is_blank

if TYPE_CHECKING:
    from collections.abc import Mapping

    from productrecon.config.matching import MatchingPolicy
    from productrecon.domain.model import CandidateRecord, ImportedRecord


type Discrepancies = dict[DiscrepancyField, FieldDiscrepancy]


def compare_fields(
    record: ImportedRecord,
    candidate: CandidateRecord,
    *,
    policy: MatchingPolicy = DEFAULT_MATCHING_POLICY,
) -> Discrepancies:
    """Return differing fields in name, brand, category, allergens order.

    Only fields present on both sides are compared. Category uses a containment
    check against the candidate's category list; the others use fuzzy matching.
    """

    threshold = policy.fuzzy_match_threshold
    discrepancies: Discrepancies = {}

    pairs = (
        (DiscrepancyField.NAME, record.name, candidate.name),
        (DiscrepancyField.BRAND, record.brand, candidate.brand),
        (DiscrepancyField.CATEGORY, record.category, candidate.categories),
        (DiscrepancyField.ALLERGENS, record.allergens, candidate.allergens),
    )
    for field_kind, imported_value, candidate_value in pairs:
        if imported_value is None or candidate_value is None:
            continue
        if is_blank(imported_value) or is_blank(candidate_value):
            continue
        if field_kind is DiscrepancyField.CATEGORY:
            if contains_text(candidate_value, imported_value):
                continue
            reason = "Imported category not found in catalog categories"
        else:
            if fuzzy_match(imported_value, candidate_value, threshold=threshold):
                continue
            reason = f"Imported {field_kind} differs from catalog {field_kind}"
        discrepancies[field_kind] = FieldDiscrepancy(
            field=field_kind,
            imported_value=imported_value,
            candidate_value=candidate_value,
            reason=reason,
        )
    return discrepancies


def apply_discrepancy_policy(
    confidence: float,
    discrepancies: Mapping[DiscrepancyField, FieldDiscrepancy],
    *,
    policy: MatchingPolicy = DEFAULT_MATCHING_POLICY,
) -> tuple[MatchStatus, float]:
    """Derive the final status and confidence for a found candidate.

    A verified code match stays matched whatever differs; the differences are
    informational. Otherwise each differing field costs ``discrepancy_penalty``
    down to ``discrepancy_confidence_floor``.
    """

    if not discrepancies or policy.is_verified(confidence):
        return MatchStatus.MATCHED, confidence

    penalized = confidence - policy.discrepancy_penalty * len(discrepancies)
    return MatchStatus.DISCREPANCY, max(policy.discrepancy_confidence_floor, penalized)
