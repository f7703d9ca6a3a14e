"""Compose the matching stages into one comparison per imported record.

Flow for one record:
1) primary cascade against the code and name indexes
2) secondary search when the primary result is not a verified code match
3) discrepancy detection and status/confidence policy

The engine holds no per-call state, so records can be compared concurrently
against the same read-only indexes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from productrecon.config.matching import DEFAULT_MATCHING_POLICY, MatchingPolicy
from productrecon.domain.model import IdentifierKind, MatchMethod, MatchResult, MatchStatus

from .cascade import PrimaryMatch, match_primary
from .discrepancy import apply_discrepancy_policy, compare_fields
from .secondary import SecondaryMatch, engage_secondary, perform_secondary_search
from .similarity import basic_name_normalizer

if TYPE_CHECKING:
    from productrecon.domain.model import CandidateRecord, ImportedRecord
    from productrecon.domain.ports import NormalizeProductName

    from .discrepancy import Discrepancies
    from .indexes import CodeIndex, NameIndex

log = logging.getLogger(__name__)


@dataclass(slots=True)
class ComparisonEngine:
    """Run primary, secondary and discrepancy stages for imported records."""

    policy: MatchingPolicy = DEFAULT_MATCHING_POLICY
    normalize_name: NormalizeProductName = basic_name_normalizer

    def match_primary(
        self,
        record: ImportedRecord,
        code_index: CodeIndex,
        name_index: NameIndex,
    ) -> PrimaryMatch:
        return match_primary(record, code_index, name_index, policy=self.policy)

    def perform_secondary_search(
        self,
        record: ImportedRecord,
        code_index: CodeIndex,
        name_index: NameIndex,
        *,
        floor: float = 0.0,
    ) -> SecondaryMatch:
        return perform_secondary_search(
            record,
            code_index,
            name_index,
            normalize_name=self.normalize_name,
            policy=self.policy,
            floor=floor,
        )

    def compare_fields(self, record: ImportedRecord, candidate: CandidateRecord) -> Discrepancies:
        return compare_fields(record, candidate, policy=self.policy)

    def compare(
        self,
        record: ImportedRecord,
        code_index: CodeIndex,
        name_index: NameIndex,
    ) -> MatchResult:
        """Compare one record; never raises."""

        try:
            return self._compare(record, code_index, name_index)
        except Exception as exc:  # noqa: BLE001
            log.warning("Failed to compare record_id=%s", record.record_id, exc_info=True)
            return MatchResult(
                record=record,
                status=MatchStatus.ERROR,
                confidence=0.0,
                reason=str(exc) or type(exc).__name__,
            )

    def _compare(
        self,
        record: ImportedRecord,
        code_index: CodeIndex,
        name_index: NameIndex,
    ) -> MatchResult:
        primary = self.match_primary(record, code_index, name_index)
        candidate = primary.candidate
        method = primary.method
        confidence = primary.confidence
        reason = primary.reason
        secondary: SecondaryMatch | None = None

        if engage_secondary(confidence, self.policy):
            attempt = self.perform_secondary_search(
                record, code_index, name_index, floor=confidence
            )
            if attempt.matched and attempt.confidence > confidence:
                secondary = attempt
                candidate = attempt.candidate
                method = attempt.method
                confidence = attempt.confidence
                reason = attempt.reason

        if candidate is None:
            return MatchResult(
                record=record,
                status=MatchStatus.UNMATCHED,
                confidence=0.0,
                method=MatchMethod.NONE,
                reason=_unmatched_reason(primary),
                identifier=primary.identifier,
            )

        discrepancies = self.compare_fields(record, candidate)
        status, final_confidence = apply_discrepancy_policy(
            confidence, discrepancies, policy=self.policy
        )
        return MatchResult(
            record=record,
            status=status,
            confidence=final_confidence,
            method=method,
            reason=reason,
            candidate=candidate,
            identifier=primary.identifier,
            discrepancies=tuple(discrepancies.values()),
            used_secondary_search=secondary is not None,
            secondary_strategy=secondary.strategy if secondary is not None else None,
        )


def _unmatched_reason(primary: PrimaryMatch) -> str:
    if primary.identifier.kind is IdentifierKind.SKU:
        return "Internal SKU detected - no code match available"
    return "No match found in catalog"


_DEFAULT_ENGINE = ComparisonEngine()


def compare(
    record: ImportedRecord,
    code_index: CodeIndex,
    name_index: NameIndex,
    *,
    normalize_name: NormalizeProductName | None = None,
    policy: MatchingPolicy | None = None,
) -> MatchResult:
    """Compare ``record`` using a default engine, optionally overriding its parts."""

    if normalize_name is None and policy is None:
        engine = _DEFAULT_ENGINE
    else:
        engine = ComparisonEngine(
            policy=policy or DEFAULT_MATCHING_POLICY,
            normalize_name=normalize_name or basic_name_normalizer,
        )
    return engine.compare(record, code_index, name_index)

