"""Budget arithmetic derived from a section store and a target count.

The functions here are pure and total: an empty store, a zero ratio sum, or a
missing target never raise. When no valid distribution exists the per-ratio
unit falls back to ``1.0`` so each section limit degenerates to its ratio.

Examples
--------
>>> from draft_budget.sections import Section
>>> store = (Section("A", 50), Section("B", 50))
>>> unit = unit_per_ratio(100, store)
>>> section_limit(unit, store[0])
50
>>> signed_delta(0, 50)
'-50'
"""

from __future__ import annotations

import math
import typing as typ

if typ.TYPE_CHECKING:
    from .sections import Section, SectionStore

NEUTRAL_UNIT = 1.0


def total_content_length(store: SectionStore) -> int:
    """Return the combined character count of every section's content."""
    return sum(len(section.content) for section in store)


def total_ratio(store: SectionStore) -> int | None:
    """Return the sum of ratios, or None when the sum is exactly zero."""
    total = sum(section.ratio for section in store)
    if total == 0:
        return None
    return total


def valid_target_count(target_count: int | None) -> int | None:
    """Return ``target_count`` only when it is present and strictly positive."""
    if target_count is None or target_count <= 0:
        return None
    return target_count


def unit_per_ratio(target_count: int | None, store: SectionStore) -> float:
    """Return the number of characters allotted to one unit of ratio.

    Parameters
    ----------
    target_count : int or None
        Desired total character count. Values that are absent, zero, or
        negative do not participate in the distribution.
    store : SectionStore
        Sections whose ratios form the distribution key.

    Returns
    -------
    float
        ``target_count / total_ratio`` when both are defined, otherwise
        ``NEUTRAL_UNIT``.
    """
    target = valid_target_count(target_count)
    ratio_sum = total_ratio(store)
    if target is None or ratio_sum is None:
        return NEUTRAL_UNIT
    return target / ratio_sum


def section_limit(unit: float, section: Section) -> int:
    """Return the floored character budget for ``section``."""
    if section.ratio == 0:
        return 0
    return math.floor(unit * section.ratio)


def signed_delta(current: int, limit: int) -> str:
    """Format ``current - limit`` with an explicit ``+`` for surpluses."""
    delta = current - limit
    if delta > 0:
        return f"+{delta}"
    return str(delta)


__all__ = [
    "NEUTRAL_UNIT",
    "section_limit",
    "signed_delta",
    "total_content_length",
    "total_ratio",
    "unit_per_ratio",
    "valid_target_count",
]
