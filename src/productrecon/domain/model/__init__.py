"""Domain model for product reconciliation."""

from __future__ import annotations

from .enums import (
    DiscrepancyField,
    IdentifierKind,
    MatchMethod,
    MatchStatus,
    QuantityDimension,
    SecondaryStrategy,
)
from .records import CandidateRecord, ImportedRecord
from .results import FieldDiscrepancy, IdentifierCode, MatchResult

__all__ = [
    "CandidateRecord",
    "DiscrepancyField",
    "FieldDiscrepancy",
    "IdentifierCode",
    "IdentifierKind",
    "ImportedRecord",
    "MatchMethod",
    "MatchResult",
    "MatchStatus",
    "QuantityDimension",
    "SecondaryStrategy",
]
