"""Unit tests for budget arithmetic.

These tests cover the neutral fallbacks (empty store, zero ratio sum, missing
or non-positive target), floor truncation of limits, and delta formatting.
"""

from __future__ import annotations

import pytest

from draft_budget.budget import (
    NEUTRAL_UNIT,
    section_limit,
    signed_delta,
    total_content_length,
    total_ratio,
    unit_per_ratio,
    valid_target_count,
)
from draft_budget.sections import Section


def test_total_content_length_counts_characters() -> None:
    """Multibyte characters count once each."""
    store = (Section("A", content="abc"), Section("B", content="議論です"))
    assert total_content_length(store) == 7


def test_total_ratio_of_empty_store_is_undefined() -> None:
    assert total_ratio(()) is None, "empty store has no distribution key"


def test_total_ratio_of_zero_ratios_is_undefined() -> None:
    assert total_ratio((Section("A", 0), Section("B", 0))) is None


def test_total_ratio_sums_ratios() -> None:
    assert total_ratio((Section("A", 35), Section("B", 15))) == 50


@pytest.mark.parametrize(
    ("target", "expected"),
    [(None, None), (0, None), (-5, None), (1, 1), (800, 800)],
)
def test_valid_target_count_requires_positive(
    target: int | None, expected: int | None
) -> None:
    assert valid_target_count(target) == expected


@pytest.mark.parametrize("target", [None, 0, -10, 100, 5000])
def test_unit_per_ratio_of_empty_store_is_neutral(target: int | None) -> None:
    """Without ratios the unit is 1.0 whatever the target."""
    assert unit_per_ratio(target, ()) == NEUTRAL_UNIT == 1.0


def test_unit_per_ratio_without_valid_target_is_neutral() -> None:
    store = (Section("A", 3),)
    assert unit_per_ratio(None, store) == 1.0
    assert unit_per_ratio(0, store) == 1.0


def test_unit_per_ratio_divides_target_by_ratio_sum() -> None:
    store = (Section("A", 50), Section("B", 50))
    assert unit_per_ratio(100, store) == pytest.approx(1.0)
    assert unit_per_ratio(300, store) == pytest.approx(3.0)


@pytest.mark.parametrize("unit", [0.0, 0.5, 1.0, 12.75, 1e9])
def test_section_limit_of_zero_ratio_is_zero(unit: float) -> None:
    assert section_limit(unit, Section("A", 0)) == 0


def test_section_limit_truncates() -> None:
    """Limits are floored, never rounded up."""
    assert section_limit(10 / 3, Section("A", 2)) == 6
    assert section_limit(2.99, Section("A", 1)) == 2


def test_section_limit_floors_toward_negative_infinity() -> None:
    assert section_limit(1.5, Section("A", -1)) == -2


@pytest.mark.parametrize(
    ("ratios", "target"),
    [
        ([1, 1, 1], 100),
        ([35, 15, 35, 15], 1000),
        ([3, 7, 11, 13], 997),
        ([1], 1),
        ([2, 5, 0, 9, 1], 12345),
        ([1] * 9, 10),
    ],
)
def test_floored_limits_stay_within_rounding_slack(
    ratios: list[int], target: int
) -> None:
    """Floored limits never exceed the target by more than the section count."""
    store = tuple(Section(f"S{i}", ratio) for i, ratio in enumerate(ratios))
    unit = unit_per_ratio(target, store)
    allocated = sum(section_limit(unit, section) for section in store)
    assert allocated <= target + len(store), (
        f"allocated {allocated} exceeds {target} by more than {len(store)}"
    )
    assert allocated >= target - len(store), (
        f"allocated {allocated} falls short of {target} by more than {len(store)}"
    )


@pytest.mark.parametrize(
    ("current", "limit", "expected"),
    [(60, 50, "+10"), (0, 50, "-50"), (50, 50, "0"), (1, 0, "+1")],
)
def test_signed_delta(current: int, limit: int, expected: str) -> None:
    assert signed_delta(current, limit) == expected


def test_even_split_scenario() -> None:
    """A 100-character target over two equal sections gives 50 each."""
    store = (Section("A", 50), Section("B", 50))
    unit = unit_per_ratio(100, store)
    assert unit == 1.0
    assert [section_limit(unit, section) for section in store] == [50, 50]
    assert signed_delta(len(store[0].content), section_limit(unit, store[0])) == "-50"
