from __future__ import annotations

from dataclasses import FrozenInstanceError, replace

import pytest

from productrecon.config import DEFAULT_MATCHING_POLICY, MatchingPolicy


def test_default_weights_sum_to_one() -> None:
    policy = DEFAULT_MATCHING_POLICY

    total = (
        policy.multi_field_brand_weight
        + policy.multi_field_category_weight
        + policy.multi_field_quantity_weight
        + policy.multi_field_name_weight
    )

    assert total == pytest.approx(1.0)


def test_only_full_confidence_is_verified() -> None:
    assert DEFAULT_MATCHING_POLICY.is_verified(1.0)
    assert not DEFAULT_MATCHING_POLICY.is_verified(0.99)
    assert DEFAULT_MATCHING_POLICY.secondary_confidence_ceiling < 1.0


def test_policy_is_immutable_but_replaceable() -> None:
    with pytest.raises(FrozenInstanceError):
        DEFAULT_MATCHING_POLICY.discrepancy_penalty = 0.2  # pyright: ignore[reportAttributeAccessIssue]

    tuned = replace(DEFAULT_MATCHING_POLICY, discrepancy_penalty=0.2)

    assert isinstance(tuned, MatchingPolicy)
    assert tuned.discrepancy_penalty == 0.2
    assert DEFAULT_MATCHING_POLICY.discrepancy_penalty == 0.1
