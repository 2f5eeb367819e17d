"""Unit tests for the draft transition function.

Each intent is checked for its effect on the draft and for whether it asks
the owner to write a snapshot.
"""

from __future__ import annotations

import json

import pytest

from draft_budget.codec import decode_snapshot
from draft_budget.models import (
    ConfirmDeleteDialog,
    ConfirmResetDialog,
    DraftState,
    NoModal,
)
from draft_budget.sections import Section, reset_to_defaults
from draft_budget.state import (
    AddSection,
    CancelConfirmation,
    Confirm,
    ConfirmDelete,
    ConfirmReset,
    RequestDelete,
    RequestReset,
    SetPendingTitle,
    SetSectionContent,
    SetSectionRatio,
    SetTargetCount,
    WriteSnapshot,
    apply_intent,
)


@pytest.fixture
def two_sections() -> DraftState:
    """A draft holding sections A and B with equal ratios."""
    return DraftState(
        target_count=100, sections=(Section("A", 50), Section("B", 50))
    )


def test_set_target_count_parses_and_persists() -> None:
    step = apply_intent(DraftState(), SetTargetCount("1200"))
    assert step.state.target_count == 1200
    assert step.persists, "target changes must be written"


@pytest.mark.parametrize("text", ["", "abc", "12.5", " 3"])
def test_set_target_count_clears_on_parse_failure(
    two_sections: DraftState, text: str
) -> None:
    """Unparsable target text clears the target but is still written."""
    step = apply_intent(two_sections, SetTargetCount(text))
    assert step.state.target_count is None, f"{text!r} should clear the target"
    assert step.persists


def test_set_section_content(two_sections: DraftState) -> None:
    step = apply_intent(two_sections, SetSectionContent("B", "hello"))
    assert step.state.sections[1].content == "hello"
    assert step.state.sections[0].content == ""
    assert step.persists


def test_set_section_ratio_ignores_bad_text_but_persists(
    two_sections: DraftState,
) -> None:
    step = apply_intent(two_sections, SetSectionRatio("A", "lots"))
    assert step.state.sections == two_sections.sections
    assert step.persists, "ratio intents are written even when ignored"


def test_set_section_ratio_applies_number(two_sections: DraftState) -> None:
    step = apply_intent(two_sections, SetSectionRatio("A", "7"))
    assert step.state.sections[0].ratio == 7


def test_set_pending_title_does_not_persist() -> None:
    step = apply_intent(DraftState(), SetPendingTitle("New"))
    assert step.state.pending_title == "New"
    assert step.effects == (), "pending title edits stay in memory"


def test_add_section_appends_pending_title(two_sections: DraftState) -> None:
    """AddSection appends the pending title and clears it."""
    state = apply_intent(two_sections, SetPendingTitle("New")).state
    step = apply_intent(state, AddSection())

    assert [section.title for section in step.state.sections] == ["A", "B", "New"]
    assert step.state.sections[-1] == Section("New", 1, "")
    assert step.state.pending_title == "", "pending title should reset"
    assert step.persists


def test_request_and_cancel_do_not_persist(two_sections: DraftState) -> None:
    requested = apply_intent(two_sections, RequestDelete("B"))
    assert requested.state.confirmation == ConfirmDeleteDialog("B")
    assert requested.effects == ()

    cancelled = apply_intent(requested.state, CancelConfirmation())
    assert cancelled.state.confirmation == NoModal()
    assert cancelled.state.sections == two_sections.sections, "B must survive"
    assert cancelled.effects == ()

    reset = apply_intent(two_sections, RequestReset())
    assert reset.state.confirmation == ConfirmResetDialog()
    assert reset.effects == ()


def test_delete_confirmation_flow(two_sections: DraftState) -> None:
    """Request, cancel, request again, and confirm a deletion."""
    state = apply_intent(two_sections, RequestDelete("B")).state
    state = apply_intent(state, CancelConfirmation()).state
    assert [section.title for section in state.sections] == ["A", "B"]

    state = apply_intent(state, RequestDelete("B")).state
    step = apply_intent(state, ConfirmDelete("B"))
    assert [section.title for section in step.state.sections] == ["A"]
    assert step.state.confirmation == NoModal()
    assert step.persists


def test_confirm_reset_restores_template(two_sections: DraftState) -> None:
    state = apply_intent(two_sections, RequestReset()).state
    step = apply_intent(state, ConfirmReset())
    assert step.state.sections == reset_to_defaults()
    assert step.state.confirmation == NoModal()
    assert step.state.target_count == 100, "reset keeps the target count"
    assert step.persists


def test_confirm_resolves_open_delete_dialog(two_sections: DraftState) -> None:
    state = apply_intent(two_sections, RequestDelete("A")).state
    step = apply_intent(state, Confirm())
    assert [section.title for section in step.state.sections] == ["B"]
    assert step.state.confirmation == NoModal()


def test_confirm_resolves_open_reset_dialog(two_sections: DraftState) -> None:
    state = apply_intent(two_sections, RequestReset()).state
    step = apply_intent(state, Confirm())
    assert step.state.sections == reset_to_defaults()


def test_confirm_without_dialog_is_noop(two_sections: DraftState) -> None:
    step = apply_intent(two_sections, Confirm())
    assert step.state == two_sections
    assert step.effects == (), "nothing to confirm means nothing to write"


def test_snapshot_effect_matches_next_state(two_sections: DraftState) -> None:
    """The written snapshot decodes back to the new persistent fields."""
    step = apply_intent(two_sections, SetSectionContent("A", "本文"))
    (effect,) = step.effects
    assert isinstance(effect, WriteSnapshot)
    restored = decode_snapshot(effect.snapshot)
    assert restored.sections == step.state.sections
    assert restored.target_count == step.state.target_count
    assert json.loads(effect.snapshot)["typicalCount"] == 100


def test_input_state_is_not_mutated(two_sections: DraftState) -> None:
    before = two_sections
    apply_intent(two_sections, SetSectionRatio("A", "9"))
    assert two_sections is before
    assert two_sections.sections[0].ratio == 50


def test_unknown_intent_raises_type_error() -> None:
    with pytest.raises(TypeError, match="Unsupported intent"):
        apply_intent(DraftState(), object())  # type: ignore[arg-type]


def test_over_long_numbers_map_to_defined_states(two_sections: DraftState) -> None:
    """Huge typed numbers clear the target or leave the ratio untouched."""
    target_step = apply_intent(two_sections, SetTargetCount("9" * 5000))
    assert target_step.state.target_count is None
    assert target_step.persists

    ratio_step = apply_intent(two_sections, SetSectionRatio("A", "9" * 5000))
    assert ratio_step.state.sections == two_sections.sections
