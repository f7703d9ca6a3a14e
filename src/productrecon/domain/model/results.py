"""Value objects produced by the matching engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from .enums import IdentifierKind, MatchMethod, MatchStatus

if TYPE_CHECKING:
    from .enums import DiscrepancyField, SecondaryStrategy
    from .records import CandidateRecord, ImportedRecord


_CODE_METHODS = frozenset(
    {MatchMethod.CODE_EXACT, MatchMethod.CODE_LEGACY, MatchMethod.CODE_RAW}
)


@dataclass(frozen=True, slots=True)
class IdentifierCode:
    """A product identifier as supplied plus its canonical form and kind."""

    raw: str
    normalized: str
    kind: IdentifierKind

    @property
    def is_lookup_kind(self) -> bool:
        """Whether the kind is a standard barcode (not an internal SKU or unknown)."""

        return self.kind not in (IdentifierKind.SKU, IdentifierKind.UNKNOWN)


@dataclass(frozen=True, slots=True, kw_only=True)
class FieldDiscrepancy:
    """One differing field between an imported record and its candidate."""

    field: DiscrepancyField
    imported_value: str
    candidate_value: str
    reason: str


@dataclass(frozen=True, slots=True, kw_only=True)
class MatchResult:
    """Outcome of one comparison run for one imported record."""

    record: ImportedRecord
    status: MatchStatus
    confidence: float = 0.0
    method: MatchMethod = MatchMethod.NONE
    reason: str = ""
    candidate: CandidateRecord | None = None
    identifier: IdentifierCode | None = None
    discrepancies: tuple[FieldDiscrepancy, ...] = ()
    used_secondary_search: bool = False
    secondary_strategy: SecondaryStrategy | None = None
    compared_at: datetime = field(default_factory=lambda: datetime.now(tz=UTC))

    @property
    def is_verified_code_match(self) -> bool:
        return self.candidate is not None and self.method in _CODE_METHODS

    @property
    def informational_differences(self) -> tuple[FieldDiscrepancy, ...]:
        """Differences kept on a match whose status they did not change."""

        if self.status is MatchStatus.MATCHED:
            return self.discrepancies
        return ()

    def discrepancy_for(self, field_kind: DiscrepancyField) -> FieldDiscrepancy | None:
        for discrepancy in self.discrepancies:
            if discrepancy.field is field_kind:
                return discrepancy
        return None
