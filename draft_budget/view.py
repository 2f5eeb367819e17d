"""Renderer-facing projection of a draft.

:func:`build_view` turns a :class:`~draft_budget.models.DraftState` into the
flat values a renderer needs: per-section limits and deltas, whole-draft
totals, the active dialog, and the concatenated text for copying out. The
view is immutable and carries no reference back to the live state.

Examples
--------
>>> from draft_budget.models import DraftState
>>> from draft_budget.sections import Section
>>> state = DraftState(target_count=100, sections=(Section("A", 50, "abc"),))
>>> view = build_view(state)
>>> view.rows[0].limit, view.rows[0].delta
(100, '-97')
>>> view.totals.delta
'-97'
"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .budget import (
    section_limit,
    signed_delta,
    total_content_length,
    unit_per_ratio,
)

if typ.TYPE_CHECKING:
    from .models import Confirmation, DraftState
    from .sections import Section


@dc.dataclass(frozen=True, slots=True)
class SectionRow:
    """Display values for one section."""

    title: str
    content: str
    ratio: int
    limit: int
    length: int
    delta: str


@dc.dataclass(frozen=True, slots=True)
class DraftTotals:
    """Whole-draft length compared against the target count."""

    total_length: int
    target_display: str
    delta: str


@dc.dataclass(frozen=True, slots=True)
class DraftView:
    """Everything a renderer shows for one intent cycle."""

    target_text: str
    rows: tuple[SectionRow, ...]
    totals: DraftTotals
    confirmation: Confirmation
    pending_title: str
    combined_text: str


def build_view(state: DraftState) -> DraftView:
    """Project ``state`` into a :class:`DraftView`."""
    unit = unit_per_ratio(state.target_count, state.sections)
    rows = tuple(_build_row(section, unit) for section in state.sections)
    target_text = "" if state.target_count is None else str(state.target_count)
    total_length = total_content_length(state.sections)
    totals = DraftTotals(
        total_length=total_length,
        target_display=target_text,
        delta=signed_delta(total_length, state.target_count or 0),
    )
    return DraftView(
        target_text=target_text,
        rows=rows,
        totals=totals,
        confirmation=state.confirmation,
        pending_title=state.pending_title,
        combined_text="".join(section.content for section in state.sections),
    )


def _build_row(section: Section, unit: float) -> SectionRow:
    limit = section_limit(unit, section)
    length = len(section.content)
    return SectionRow(
        title=section.title,
        content=section.content,
        ratio=section.ratio,
        limit=limit,
        length=length,
        delta=signed_delta(length, limit),
    )


__all__ = ["DraftTotals", "DraftView", "SectionRow", "build_view"]
