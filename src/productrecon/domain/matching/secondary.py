"""Secondary (fallback) search.

Engaged only when the primary cascade did not produce a verified code match.
Three strategies run in order: partial code, normalized name (+ brand) and a
weighted multi-field score. A strategy replaces the running best only when
its confidence is strictly higher, so the outcome never regresses.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from productrecon.config.matching import DEFAULT_MATCHING_POLICY
from productrecon.domain.model import MatchMethod, SecondaryStrategy

from .identifiers import normalize_code
from .quantity import quantity_matches
from .similarity import (
    basic_name_normalizer,
    contains_text,
    fuzzy_match,
    is_blank,
    is_generic_name,
    similarity,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from productrecon.config.matching import MatchingPolicy
    from productrecon.domain.model import CandidateRecord, ImportedRecord
    from productrecon.domain.ports import NormalizeProductName

    from .indexes import CodeIndex, NameIndex

log = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, kw_only=True)
class SecondaryMatch:
    """Best candidate found by the fallback strategies."""

    candidate: CandidateRecord | None
    strategy: SecondaryStrategy | None
    method: MatchMethod
    confidence: float
    reason: str

    @classmethod
    def none(cls, confidence: float = 0.0) -> SecondaryMatch:
        return cls(
            candidate=None,
            strategy=None,
            method=MatchMethod.NONE,
            confidence=confidence,
            reason="",
        )

    @property
    def matched(self) -> bool:
        return self.candidate is not None


def engage_secondary(confidence: float, policy: MatchingPolicy = DEFAULT_MATCHING_POLICY) -> bool:
    return not policy.is_verified(confidence)


def perform_secondary_search(
    record: ImportedRecord,
    code_index: CodeIndex,
    name_index: NameIndex,
    *,
    normalize_name: NormalizeProductName = basic_name_normalizer,
    policy: MatchingPolicy = DEFAULT_MATCHING_POLICY,
    floor: float = 0.0,
) -> SecondaryMatch:
    """Run all fallback strategies and return the strongest result above ``floor``.

    ``floor`` is usually the primary confidence: anything at or below it is
    discarded. When nothing beats it the returned match has no candidate.
    """

    best = SecondaryMatch.none(floor)
    for attempt in (
        _match_partial_code(record, code_index, policy),
        _match_normalized_name(record, name_index, normalize_name, policy),
        _match_multi_field(record, name_index, policy),
    ):
        if attempt is not None and attempt.confidence > best.confidence:
            best = attempt
    return best


def _match_partial_code(
    record: ImportedRecord,
    code_index: CodeIndex,
    policy: MatchingPolicy,
) -> SecondaryMatch | None:
    normalized = normalize_code(record.code)
    length = policy.partial_code_length
    if len(normalized) < length or not (normalized.isascii() and normalized.isdigit()):
        return None

    suffix = normalized[-length:]
    for code, candidate in code_index.items():
        if code.endswith(suffix):
            return SecondaryMatch(
                candidate=candidate,
                strategy=SecondaryStrategy.PARTIAL_CODE,
                method=MatchMethod.CODE_PARTIAL,
                confidence=policy.partial_code_confidence,
                reason=f"Partial code match (last {length} digits)",
            )
    return None


def _match_normalized_name(
    record: ImportedRecord,
    name_index: NameIndex,
    normalize_name: NormalizeProductName,
    policy: MatchingPolicy,
) -> SecondaryMatch | None:
    if record.name is None or is_blank(record.name):
        return None

    try:
        normalized_name = normalize_name(record.name)
    except Exception:  # noqa: BLE001
        log.warning(
            "Name normalization failed for record_id=%s name=%r; skipping strategy",
            record.record_id,
            record.name,
            exc_info=True,
        )
        return None

    threshold = policy.fuzzy_match_threshold
    candidates = [
        candidate
        for candidate in _distinct(name_index.values())
        if not is_blank(candidate.name)
        and fuzzy_match(normalized_name, candidate.name, threshold=threshold)
    ]
    if not candidates:
        return None

    if not is_blank(record.brand):
        for candidate in candidates:
            if not is_blank(candidate.brand) and fuzzy_match(
                record.brand, candidate.brand, threshold=threshold
            ):
                return SecondaryMatch(
                    candidate=candidate,
                    strategy=SecondaryStrategy.NORMALIZED_NAME,
                    method=MatchMethod.NAME_NORMALIZED_BRAND,
                    confidence=policy.name_brand_confidence,
                    reason="Normalized name + brand match",
                )
        return None

    if is_generic_name(normalized_name):
        log.debug("Skipping name-only match for generic name %r", normalized_name)
        return None

    best_candidate: CandidateRecord | None = None
    best_score = 0.0
    for candidate in candidates:
        score = similarity(normalized_name, candidate.name)
        if score >= policy.name_only_min_similarity and score > best_score:
            best_candidate = candidate
            best_score = score
    if best_candidate is None:
        return None

    return SecondaryMatch(
        candidate=best_candidate,
        strategy=SecondaryStrategy.NORMALIZED_NAME,
        method=MatchMethod.NAME_NORMALIZED,
        confidence=best_score * policy.name_only_scale,
        reason=f"Normalized name match ({best_score:.0%} similarity)",
    )


def _match_multi_field(
    record: ImportedRecord,
    name_index: NameIndex,
    policy: MatchingPolicy,
) -> SecondaryMatch | None:
    if is_blank(record.brand):
        return None

    candidates = [
        candidate
        for candidate in _distinct(name_index.values())
        if contains_text(candidate.brand, record.brand)
    ]
    if not is_blank(record.category):
        candidates = [
            candidate
            for candidate in candidates
            if contains_text(candidate.categories, record.category)
        ]

    best_candidate: CandidateRecord | None = None
    best_score = 0.0
    for candidate in candidates:
        score = multi_field_score(record, candidate, policy=policy)
        if score >= policy.multi_field_min_score and score > best_score:
            best_candidate = candidate
            best_score = score
    if best_candidate is None:
        return None

    confidence = min(best_score, policy.secondary_confidence_ceiling)
    return SecondaryMatch(
        candidate=best_candidate,
        strategy=SecondaryStrategy.MULTI_FIELD,
        method=MatchMethod.MULTI_FIELD,
        confidence=confidence,
        reason=f"Brand + category + size match (score: {best_score:.0%})",
    )


def multi_field_score(
    record: ImportedRecord,
    candidate: CandidateRecord,
    *,
    policy: MatchingPolicy = DEFAULT_MATCHING_POLICY,
) -> float:
    """Weighted agreement over brand, category, quantity and name."""

    score = 0.0
    if fuzzy_match(record.brand, candidate.brand, threshold=policy.fuzzy_match_threshold):
        score += policy.multi_field_brand_weight
    if contains_text(candidate.categories, record.category):
        score += policy.multi_field_category_weight
    if quantity_matches(
        record.quantity,
        record.unit,
        candidate.quantity,
        tolerance=policy.quantity_tolerance,
    ):
        score += policy.multi_field_quantity_weight
    score += similarity(record.name, candidate.name) * policy.multi_field_name_weight
    return score


def _distinct(candidates: Iterable[CandidateRecord]) -> list[CandidateRecord]:
    seen: set[str] = set()
    distinct: list[CandidateRecord] = []
    for candidate in candidates:
        if candidate.candidate_id in seen:
            continue
        seen.add(candidate.candidate_id)
        distinct.append(candidate)
    return distinct
