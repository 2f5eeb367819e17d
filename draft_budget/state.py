"""Intents and the pure transition function for a draft.

:func:`apply_intent` never touches storage. It returns the next
:class:`~draft_budget.models.DraftState` together with the effects the owner
must carry out, currently only :class:`WriteSnapshot`. Intents that change the
target count or the sections (including confirmed resets and deletions) emit
a snapshot; intents that only move the pending title or the confirmation
dialog emit nothing.

Numeric input arrives as raw text. Text that does not parse clears the target
count or leaves a ratio untouched; neither case is reported as an error.

Examples
--------
>>> from draft_budget.models import DraftState
>>> step = apply_intent(DraftState(), SetPendingTitle("Intro"))
>>> step.effects
()
>>> step = apply_intent(step.state, AddSection())
>>> [section.title for section in step.state.sections]
['Intro']
>>> isinstance(step.effects[0], WriteSnapshot)
True
"""

from __future__ import annotations

import dataclasses as dc

from .codec import encode_snapshot
from .models import (
    ConfirmDeleteDialog,
    ConfirmResetDialog,
    DraftState,
    NoModal,
)
from .sections import (
    add_section,
    parse_int,
    remove_section,
    reset_to_defaults,
    update_content,
    update_ratio,
)


@dc.dataclass(frozen=True, slots=True)
class SetTargetCount:
    """Replace the target count with ``text`` parsed as an integer."""

    text: str


@dc.dataclass(frozen=True, slots=True)
class SetSectionContent:
    """Replace the content of the sections titled ``title``."""

    title: str
    text: str


@dc.dataclass(frozen=True, slots=True)
class SetSectionRatio:
    """Replace the ratio of the sections titled ``title`` when ``text`` parses."""

    title: str
    text: str


@dc.dataclass(frozen=True, slots=True)
class SetPendingTitle:
    """Record the title for the next section to add."""

    text: str


@dc.dataclass(frozen=True, slots=True)
class AddSection:
    """Append a section titled after the pending title."""


@dc.dataclass(frozen=True, slots=True)
class RequestDelete:
    """Open the delete confirmation for ``title``."""

    title: str


@dc.dataclass(frozen=True, slots=True)
class RequestReset:
    """Open the reset confirmation."""


@dc.dataclass(frozen=True, slots=True)
class CancelConfirmation:
    """Close the active confirmation without acting on it."""


@dc.dataclass(frozen=True, slots=True)
class ConfirmDelete:
    """Delete the sections titled ``title`` and close the dialog."""

    title: str


@dc.dataclass(frozen=True, slots=True)
class ConfirmReset:
    """Replace the sections with the default template and close the dialog."""


@dc.dataclass(frozen=True, slots=True)
class Confirm:
    """Accept whichever confirmation dialog is currently open."""


Intent = (
    SetTargetCount
    | SetSectionContent
    | SetSectionRatio
    | SetPendingTitle
    | AddSection
    | RequestDelete
    | RequestReset
    | CancelConfirmation
    | ConfirmDelete
    | ConfirmReset
    | Confirm
)


@dc.dataclass(frozen=True, slots=True)
class WriteSnapshot:
    """Persist ``snapshot`` to the draft's key-value store."""

    snapshot: str


Effect = WriteSnapshot


@dc.dataclass(frozen=True, slots=True)
class Transition:
    """The next state plus the effects its owner must execute."""

    state: DraftState
    effects: tuple[Effect, ...] = ()

    @property
    def persists(self) -> bool:
        """Return True when the transition asks for a snapshot write."""
        return any(isinstance(effect, WriteSnapshot) for effect in self.effects)


def apply_intent(state: DraftState, intent: Intent) -> Transition:  # noqa: C901, PLR0911
    """Apply ``intent`` to ``state`` and return the resulting transition.

    Parameters
    ----------
    state : DraftState
        The current draft. It is never mutated.
    intent : Intent
        The user action to apply.

    Returns
    -------
    Transition
        The next state and, for intents that change persisted fields, a
        :class:`WriteSnapshot` carrying the encoded next state.

    Raises
    ------
    TypeError
        If ``intent`` is not one of the known intent types.
    """
    match intent:
        case SetTargetCount(text=text):
            return _persisted(dc.replace(state, target_count=parse_int(text)))
        case SetSectionContent(title=title, text=text):
            sections = update_content(state.sections, title, text)
            return _persisted(dc.replace(state, sections=sections))
        case SetSectionRatio(title=title, text=text):
            sections = update_ratio(state.sections, title, text)
            return _persisted(dc.replace(state, sections=sections))
        case SetPendingTitle(text=text):
            return Transition(dc.replace(state, pending_title=text))
        case AddSection():
            sections = add_section(state.sections, state.pending_title)
            return _persisted(dc.replace(state, sections=sections, pending_title=""))
        case RequestDelete(title=title):
            return Transition(
                dc.replace(state, confirmation=ConfirmDeleteDialog(title))
            )
        case RequestReset():
            return Transition(dc.replace(state, confirmation=ConfirmResetDialog()))
        case CancelConfirmation():
            return Transition(dc.replace(state, confirmation=NoModal()))
        case ConfirmDelete(title=title):
            sections = remove_section(state.sections, title)
            return _persisted(
                dc.replace(state, sections=sections, confirmation=NoModal())
            )
        case ConfirmReset():
            return _persisted(
                dc.replace(state, sections=reset_to_defaults(), confirmation=NoModal())
            )
        case Confirm():
            return _resolve_confirmation(state)
    msg = f"Unsupported intent: {intent!r}"
    raise TypeError(msg)


def _resolve_confirmation(state: DraftState) -> Transition:
    match state.confirmation:
        case ConfirmDeleteDialog(title=title):
            return apply_intent(state, ConfirmDelete(title))
        case ConfirmResetDialog():
            return apply_intent(state, ConfirmReset())
        case _:
            return Transition(state)


def _persisted(state: DraftState) -> Transition:
    return Transition(state, (WriteSnapshot(encode_snapshot(state)),))


__all__ = [
    "AddSection",
    "CancelConfirmation",
    "Confirm",
    "ConfirmDelete",
    "ConfirmReset",
    "Effect",
    "Intent",
    "RequestDelete",
    "RequestReset",
    "SetPendingTitle",
    "SetSectionContent",
    "SetSectionRatio",
    "SetTargetCount",
    "Transition",
    "WriteSnapshot",
    "apply_intent",
]
