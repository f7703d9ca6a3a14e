from __future__ import annotations

import pytest

from productrecon.domain.matching.similarity import (
    basic_name_normalizer,
    contains_text,
    fuzzy_match,
    is_blank,
    is_generic_name,
    similarity,
)


def test_similarity_scores() -> None:
    assert similarity("Peanut Butter", " peanut butter ") == 1.0
    assert similarity("Peanut Butter", "Crunchy Peanut Butter") == 0.8
    assert similarity("organic rolled oats", "rolled oats organic blend") == pytest.approx(0.75)
    assert similarity("apples", "oranges") == 0.0


def test_similarity_of_missing_values_is_zero() -> None:
    assert similarity(None, "x") == 0.0
    assert similarity("  ", "x") == 0.0


def test_fuzzy_match_uses_threshold() -> None:
    assert fuzzy_match("red apples", "red pears")
    assert not fuzzy_match("red apples", "red pears", threshold=0.6)


def test_contains_text_is_case_insensitive() -> None:
    assert contains_text("Snacks, Pretzels", "pretzels")
    assert not contains_text("Snacks", "")
    assert not contains_text(None, "snacks")


def test_is_blank() -> None:
    assert is_blank(None)
    assert is_blank(" \t")
    assert not is_blank("x")


@pytest.mark.parametrize(
    "name",
    ["milk", "", "Open Item 42", "Assorted candies", "store brand cola", "chicken", "n/a"],
)
def test_generic_names(name: str) -> None:
    assert is_generic_name(name)


def test_specific_name_is_not_generic() -> None:
    assert not is_generic_name("organic rolled oats")


def test_basic_name_normalizer_strips_size_and_punctuation() -> None:
    assert basic_name_normalizer("Crunchy Peanut-Butter, 16 oz") == "crunchy peanut butter"
    assert basic_name_normalizer("Cola 500ml  (6 pack)") == "cola"
