"""Plain-text rendering of the draft read model.

This module turns a :class:`~draft_budget.view.DraftView` into the terminal
listing printed by the ``draft`` CLI: the target count, one block per section
with its budget and surplus or shortfall, the whole-draft total, and the
question for any open confirmation dialog.

Typical usage mirrors the CLI:

>>> from draft_budget.models import DraftState
>>> from draft_budget.view import build_view
>>> renderer = TextViewRenderer()
>>> print(renderer.render(build_view(DraftState())))  # doctest: +SKIP

Templates are read from ``draft_budget/templates`` unless a custom directory
is provided. Output is plain text, so autoescaping is disabled.
"""

from __future__ import annotations

import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from .models import ConfirmDeleteDialog, ConfirmResetDialog

if typ.TYPE_CHECKING:
    from .models import Confirmation
    from .view import DraftView

RESET_PROMPT = "Replace every section with the default template?"
DELETE_PROMPT = "Delete section '{title}'?"


def confirmation_prompt(confirmation: Confirmation) -> str | None:
    """Return the question for an open dialog, or None without one."""
    match confirmation:
        case ConfirmResetDialog():
            return RESET_PROMPT
        case ConfirmDeleteDialog(title=title):
            return DELETE_PROMPT.format(title=title)
        case _:
            return None


class TextViewRenderer:
    """Render draft views through the ``draft_view.jinja`` template."""

    def __init__(self, *, templates_dir: Path | None = None) -> None:
        """Initialize the Jinja environment.

        Parameters
        ----------
        templates_dir : Path, optional
            Directory containing Jinja templates. Defaults to
            ``draft_budget/templates``.
        """
        self.templates_dir = templates_dir or Path(__file__).parent / "templates"
        self.env = Environment(
            loader=FileSystemLoader(self.templates_dir),
            autoescape=False,  # noqa: S701 - terminal output, not HTML
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.template = self.env.get_template("draft_view.jinja")

    def render(self, view: DraftView) -> str:
        """Return the listing for ``view``, always ending with a newline."""
        text = self.template.render(
            view=view, prompt=confirmation_prompt(view.confirmation)
        )
        if not text.endswith("\n"):
            text += "\n"
        return text


__all__ = [
    "DELETE_PROMPT",
    "RESET_PROMPT",
    "TextViewRenderer",
    "confirmation_prompt",
]
