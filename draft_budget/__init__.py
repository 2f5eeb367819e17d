"""Split a target character count across draft sections by ratio.

This package models a writing draft as ordered, ratio-weighted sections,
derives each section's character budget from a target total, and persists
the draft to a key-value store after every change.

Exports
-------
- ``DraftSession``: Owner of a live draft that writes through to a store.
- ``DraftState``: Immutable draft aggregate.
- ``apply_intent``: Pure transition function over intents.
- ``build_view``: Renderer-facing projection of a draft.
- ``app`` / ``main``: Cyclopts CLI entry points.

Examples
--------
>>> from draft_budget import DraftSession
>>> from draft_budget.storage import MemoryStore
>>> session = DraftSession.load(MemoryStore())
>>> session.state.sections
()
"""

from __future__ import annotations

from .cli import app, main
from .models import DraftState
from .session import DraftSession
from .state import apply_intent
from .view import build_view

__all__ = ["DraftSession", "DraftState", "app", "apply_intent", "build_view", "main"]
