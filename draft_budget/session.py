"""Own a live draft and write it through to a key-value store.

:class:`DraftSession` is the only place where a draft changes. It loads the
initial state from a store, feeds each intent through
:func:`~draft_budget.state.apply_intent`, and carries out the returned
effects before accepting the next intent, so the stored snapshot always
matches the in-memory state once ``dispatch`` returns.

Example
-------
>>> from draft_budget.session import DraftSession
>>> from draft_budget.state import SetTargetCount
>>> from draft_budget.storage import MemoryStore
>>> store = MemoryStore()
>>> session = DraftSession.load(store)
>>> session.dispatch(SetTargetCount("1200")).target_count
1200
>>> store.get("draft-budget")
'{"typicalCount": 1200, "sections": []}'
"""

from __future__ import annotations

import logging
import typing as typ

from ._constants import DEFAULT_STORAGE_KEY
from .codec import decode_snapshot
from .state import WriteSnapshot, apply_intent

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .models import DraftState
    from .state import Effect, Intent
    from .storage import KeyValueStore

logger = logging.getLogger(__name__)


class DraftSession:
    """Single owner of a draft backed by a key-value store."""

    def __init__(
        self,
        state: DraftState,
        store: KeyValueStore,
        *,
        key: str = DEFAULT_STORAGE_KEY,
    ) -> None:
        self._state = state
        self._store = store
        self.key = key

    @classmethod
    def load(
        cls, store: KeyValueStore, *, key: str = DEFAULT_STORAGE_KEY
    ) -> DraftSession:
        """Build a session from the snapshot stored under ``key``.

        Missing or malformed snapshots start an empty draft; the store is not
        written until the first persisted intent.
        """
        return cls(decode_snapshot(store.get(key)), store, key=key)

    @property
    def state(self) -> DraftState:
        """Return the current immutable draft."""
        return self._state

    def dispatch(self, intent: Intent) -> DraftState:
        """Apply ``intent``, execute its effects, and return the new draft."""
        transition = apply_intent(self._state, intent)
        self._state = transition.state
        for effect in transition.effects:
            self._execute(effect)
        return self._state

    def dispatch_all(self, intents: cabc.Iterable[Intent]) -> DraftState:
        """Dispatch ``intents`` one after another and return the final draft."""
        for intent in intents:
            self.dispatch(intent)
        return self._state

    def _execute(self, effect: Effect) -> None:
        match effect:
            case WriteSnapshot(snapshot=snapshot):
                self._store.set(self.key, snapshot)
                logger.debug("Wrote draft snapshot under '%s'", self.key)


__all__ = ["DraftSession"]
