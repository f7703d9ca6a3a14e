"""Primary match cascade.

Tiers run in a fixed order and the first hit wins:

1) exact normalized code
2) legacy code (13-digit code with its leading zero removed)
3) raw code as supplied
4) exact product name

Code tiers only run for standard barcode kinds of at least eight digits. Shorter
codes are internal store SKUs and would collide with unrelated catalog codes.
A code hit therefore always outranks a name hit.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from productrecon.config.matching import DEFAULT_MATCHING_POLICY
from productrecon.domain.model import IdentifierCode, MatchMethod

from .identifiers import parse_identifier
from .indexes import name_key

if TYPE_CHECKING:
    from productrecon.config.matching import MatchingPolicy
    from productrecon.domain.model import CandidateRecord, ImportedRecord

    from .indexes import CodeIndex, NameIndex


@dataclass(frozen=True, slots=True, kw_only=True)
class PrimaryMatch:
    """Result of the primary cascade for one imported record."""

    candidate: CandidateRecord | None
    method: MatchMethod
    confidence: float
    reason: str
    identifier: IdentifierCode

    @classmethod
    def none(cls, identifier: IdentifierCode) -> PrimaryMatch:
        return cls(
            candidate=None,
            method=MatchMethod.NONE,
            confidence=0.0,
            reason="No match found",
            identifier=identifier,
        )

    @property
    def matched(self) -> bool:
        return self.candidate is not None


def code_lookup_allowed(identifier: IdentifierCode, policy: MatchingPolicy) -> bool:
    return (
        identifier.is_lookup_kind
        and len(identifier.normalized) >= policy.min_code_lookup_length
    )


def legacy_code(normalized: str, policy: MatchingPolicy) -> str | None:
    """Code as stored by the older normalization scheme, if it differs."""

    if len(normalized) == policy.legacy_code_length and normalized.startswith("0"):
        return normalized[1:]
    return None


def match_primary(
    record: ImportedRecord,
    code_index: CodeIndex,
    name_index: NameIndex,
    *,
    policy: MatchingPolicy = DEFAULT_MATCHING_POLICY,
) -> PrimaryMatch:
    """Run the primary tiers against pre-built indexes."""

    identifier = parse_identifier(record.code)
    verified = policy.verified_code_confidence

    if code_lookup_allowed(identifier, policy):
        candidate = code_index.get(identifier.normalized)
        if candidate is not None:
            return PrimaryMatch(
                candidate=candidate,
                method=MatchMethod.CODE_EXACT,
                confidence=verified,
                reason="Exact code match",
                identifier=identifier,
            )

        legacy = legacy_code(identifier.normalized, policy)
        if legacy is not None:
            candidate = code_index.get(legacy)
            if candidate is not None:
                return PrimaryMatch(
                    candidate=candidate,
                    method=MatchMethod.CODE_LEGACY,
                    confidence=verified,
                    reason="Exact code match (legacy normalization)",
                    identifier=identifier,
                )

        if identifier.raw and identifier.raw != identifier.normalized:
            candidate = code_index.get(identifier.raw)
            if candidate is not None:
                return PrimaryMatch(
                    candidate=candidate,
                    method=MatchMethod.CODE_RAW,
                    confidence=verified,
                    reason="Exact match on the code as supplied",
                    identifier=identifier,
                )

    key = name_key(record.name)
    if key is not None:
        candidate = name_index.get(key)
        if candidate is not None:
            return PrimaryMatch(
                candidate=candidate,
                method=MatchMethod.NAME_EXACT,
                confidence=policy.exact_name_confidence,
                reason="Exact product name match",
                identifier=identifier,
            )

    return PrimaryMatch.none(identifier)
