from __future__ import annotations

from types import MappingProxyType

import pytest

from productrecon.domain.matching.engine import ComparisonEngine, compare
from productrecon.domain.matching.indexes import build_candidate_indexes
from productrecon.domain.model import (
    CandidateRecord,
    DiscrepancyField,
    MatchMethod,
    MatchStatus,
    SecondaryStrategy,
)
from tests.helpers.records import (
    EAN_13,
    UPC_A,
    failing_normalizer,
    make_candidate,
    make_record,
)


class ExplodingIndex(dict[str, CandidateRecord]):
    def get(  # pyright: ignore[reportIncompatibleMethodOverride]
        self, key: str, default: object = None
    ) -> CandidateRecord | None:
        raise RuntimeError("index unavailable")


def test_verified_code_match_keeps_differences_informational() -> None:
    candidate = make_candidate(code=UPC_A, name="Peanut Butter", brand="Acme")
    indexes = build_candidate_indexes([candidate])

    result = compare(
        make_record(code=UPC_A, name="Almond Spread", brand="Acme"),
        indexes.by_code,
        indexes.by_name,
    )

    assert result.status is MatchStatus.MATCHED
    assert result.confidence == 1.0
    assert result.method is MatchMethod.CODE_EXACT
    assert result.is_verified_code_match
    assert not result.used_secondary_search
    assert [d.field for d in result.informational_differences] == [DiscrepancyField.NAME]


def test_unverified_match_with_discrepancy_is_penalized() -> None:
    candidate = make_candidate(name="Trail Mix", brand="Zenith")
    indexes = build_candidate_indexes([candidate])

    result = compare(make_record(name="Trail Mix", brand="Acme"), indexes.by_code, indexes.by_name)

    assert result.status is MatchStatus.DISCREPANCY
    assert result.method is MatchMethod.NAME_EXACT
    assert result.confidence == pytest.approx(0.75)
    assert result.discrepancy_for(DiscrepancyField.BRAND) is not None
    assert result.informational_differences == ()


def test_secondary_search_result_is_used_when_primary_misses() -> None:
    candidate = make_candidate(code="5000081333931")
    indexes = build_candidate_indexes([candidate])

    result = compare(make_record(code=EAN_13), indexes.by_code, indexes.by_name)

    assert result.status is MatchStatus.MATCHED
    assert result.candidate is candidate
    assert result.method is MatchMethod.CODE_PARTIAL
    assert result.confidence == pytest.approx(0.75)
    assert result.used_secondary_search
    assert result.secondary_strategy is SecondaryStrategy.PARTIAL_CODE


def test_secondary_search_never_lowers_primary_confidence() -> None:
    named = make_candidate(name="Fancy Granola Clusters")
    partial = make_candidate(code="5000081333931")
    indexes = build_candidate_indexes([named, partial])

    result = compare(
        make_record(code=EAN_13, name="Fancy Granola Clusters"),
        indexes.by_code,
        indexes.by_name,
    )

    assert result.candidate is named
    assert result.method is MatchMethod.NAME_EXACT
    assert result.confidence == pytest.approx(0.85)
    assert not result.used_secondary_search


def test_unmatched_sku_explains_itself() -> None:
    empty = MappingProxyType({})

    result = compare(make_record(code="ABC123"), empty, empty)

    assert result.status is MatchStatus.UNMATCHED
    assert result.confidence == 0.0
    assert result.candidate is None
    assert "SKU" in result.reason


def test_unmatched_barcode() -> None:
    empty = MappingProxyType({})

    result = compare(make_record(code=UPC_A, name="Unknown Thing"), empty, empty)

    assert result.status is MatchStatus.UNMATCHED
    assert result.reason == "No match found in catalog"


def test_failing_normalizer_does_not_fail_the_record() -> None:
    candidate = make_candidate(code="5000081333931")
    indexes = build_candidate_indexes([candidate])

    result = compare(
        make_record(code=EAN_13, name="Fancy Granola Clusters"),
        indexes.by_code,
        indexes.by_name,
        normalize_name=failing_normalizer,
    )

    assert result.status is MatchStatus.MATCHED
    assert result.method is MatchMethod.CODE_PARTIAL


def test_unexpected_failure_becomes_error_result() -> None:
    engine = ComparisonEngine()

    result = engine.compare(make_record(name="Trail Mix"), {}, ExplodingIndex())

    assert result.status is MatchStatus.ERROR
    assert result.confidence == 0.0
    assert result.reason == "index unavailable"


def test_malformed_input_does_not_raise() -> None:
    indexes = build_candidate_indexes([make_candidate(code=UPC_A, name="x")])

    result = compare(
        make_record(code="0x--%%", name="", brand=" ", quantity=float("inf"), unit="??"),
        indexes.by_code,
        indexes.by_name,
    )

    assert result.status is MatchStatus.UNMATCHED
