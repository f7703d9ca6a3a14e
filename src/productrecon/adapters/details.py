"""Serialize match results into plain dictionaries at the application boundary."""

from __future__ import annotations

from typing import TYPE_CHECKING

from productrecon.domain.model import DiscrepancyField, IdentifierKind, MatchStatus

if TYPE_CHECKING:
    from collections.abc import Iterable

    from productrecon.domain.model import FieldDiscrepancy, MatchResult

SKU_MATCH_WARNING = "Match based on product name - original code is an internal SKU"


def comparison_details(result: MatchResult) -> dict[str, object]:
    """Return a JSON-ready description of ``result``.

    Differences on a verified match are reported as ``informational_differences``;
    on any other match they are ``discrepancies``.
    """

    identifier = result.identifier
    is_sku = identifier is not None and identifier.kind is IdentifierKind.SKU
    details: dict[str, object] = {
        "record_id": result.record.record_id,
        "status": str(result.status),
        "confidence": result.confidence,
        "method": str(result.method),
        "reason": result.reason,
        "identifier_kind": str(identifier.kind) if identifier is not None else None,
        "searched_code": result.record.code,
        "searched_name": result.record.name,
        "compared_at": result.compared_at.isoformat(),
    }

    candidate = result.candidate
    if candidate is not None:
        details["candidate"] = {
            "candidate_id": candidate.candidate_id,
            "code": candidate.code,
            "name": candidate.name,
            "brand": candidate.brand,
        }
        differences = _serialize_discrepancies(result.discrepancies)
        if result.status is MatchStatus.MATCHED:
            if differences:
                details["informational_differences"] = differences
        elif differences:
            details["discrepancies"] = differences
        details.update(_discrepancy_flags(result))
        if is_sku:
            details["warning"] = SKU_MATCH_WARNING
    elif result.status is MatchStatus.ERROR:
        details["error"] = result.reason
    else:
        details["secondary_search_attempted"] = True

    if result.used_secondary_search:
        details["secondary_search_used"] = True
        details["secondary_search_method"] = (
            str(result.secondary_strategy) if result.secondary_strategy is not None else None
        )
    return details


def _serialize_discrepancies(
    discrepancies: Iterable[FieldDiscrepancy],
) -> dict[str, dict[str, str]]:
    return {
        str(discrepancy.field): {
            "imported": discrepancy.imported_value,
            "candidate": discrepancy.candidate_value,
            "reason": discrepancy.reason,
        }
        for discrepancy in discrepancies
    }


def _discrepancy_flags(result: MatchResult) -> dict[str, bool]:
    return {
        f"has_{field_kind}_discrepancy": result.discrepancy_for(field_kind) is not None
        for field_kind in DiscrepancyField
    }
