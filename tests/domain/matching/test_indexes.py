from __future__ import annotations

import pytest

from productrecon.domain.matching.indexes import (
    CandidateIndexes,
    build_candidate_indexes,
    candidate_code,
    name_key,
)
from tests.helpers.records import EAN_13, UPC_A, make_candidate


def test_name_key_trims_and_lowercases() -> None:
    assert name_key("  Peanut Butter ") == "peanut butter"
    assert name_key("   ") is None
    assert name_key(None) is None


def test_candidate_code_prefers_stored_normalized_code() -> None:
    assert candidate_code(make_candidate(code="x", normalized_code=UPC_A)) == UPC_A
    assert candidate_code(make_candidate(code="0-12345-67890-5")) == UPC_A


def test_indexes_by_normalized_code_and_name() -> None:
    butter = make_candidate(code=UPC_A, name="Peanut Butter")
    jam = make_candidate(code=EAN_13, name="Strawberry Jam")

    indexes = build_candidate_indexes([butter, jam])

    assert indexes.by_code[UPC_A] is butter
    assert indexes.by_code[EAN_13] is jam
    assert indexes.by_name["peanut butter"] is butter
    assert len(indexes) == 4


def test_duplicate_keys_keep_last_candidate() -> None:
    first = make_candidate(code=UPC_A, name="Jam")
    second = make_candidate(code=UPC_A, name="jam")

    indexes = build_candidate_indexes([first, second])

    assert indexes.by_code[UPC_A] is second
    assert indexes.by_name["jam"] is second


def test_raw_code_is_indexed_without_overriding_normalized_keys() -> None:
    dashed = make_candidate(code="0-12345-67890-5")
    owner = make_candidate(code="4006-3813-3393-1", normalized_code="4006-3813-3393-1")
    stale = make_candidate(code="4006-3813-3393-1", normalized_code="STALE")

    indexes = build_candidate_indexes([dashed, owner, stale])

    assert indexes.by_code["0-12345-67890-5"] is dashed
    assert indexes.by_code["4006-3813-3393-1"] is owner
    assert indexes.by_code["STALE"] is stale


def test_indexes_are_read_only() -> None:
    indexes = build_candidate_indexes([make_candidate(code=UPC_A)])

    with pytest.raises(TypeError):
        indexes.by_code["new"] = make_candidate()  # pyright: ignore[reportIndexIssue]


def test_empty_indexes() -> None:
    assert len(CandidateIndexes()) == 0
    assert len(build_candidate_indexes([])) == 0
