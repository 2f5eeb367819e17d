"""Typed dataclasses describing the draft aggregate and its dialogs."""

from __future__ import annotations

import dataclasses as dc

from .sections import SectionStore  # noqa: TC001 - used for runtime type metadata


@dc.dataclass(frozen=True, slots=True)
class NoModal:
    """No confirmation dialog is open."""


@dc.dataclass(frozen=True, slots=True)
class ConfirmResetDialog:
    """The user asked to replace every section with the default template."""


@dc.dataclass(frozen=True, slots=True)
class ConfirmDeleteDialog:
    """The user asked to delete the sections titled ``title``."""

    title: str


Confirmation = NoModal | ConfirmResetDialog | ConfirmDeleteDialog


@dc.dataclass(frozen=True, slots=True)
class DraftState:
    """The whole draft as owned by a session.

    Attributes
    ----------
    target_count : int | None
        Desired total character count; ``None`` when unset or unparsable.
    pending_title : str
        Title typed for the next section to add. Never persisted.
    confirmation : Confirmation
        The active confirmation dialog. Never persisted.
    sections : SectionStore
        Sections in display and concatenation order.
    """

    target_count: int | None = None
    pending_title: str = ""
    confirmation: Confirmation = dc.field(default_factory=NoModal)
    sections: SectionStore = ()


__all__ = [
    "ConfirmDeleteDialog",
    "ConfirmResetDialog",
    "Confirmation",
    "DraftState",
    "NoModal",
]
