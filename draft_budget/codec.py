r"""Serialize the persistent part of a draft to and from JSON text.

Only the target count and the sections survive a round trip; the pending
title and the confirmation dialog always start at their defaults. Decoding is
all-or-nothing: a snapshot with a missing or mistyped field yields an empty
draft rather than a partially restored one.

Example
-------
>>> from draft_budget.codec import decode_snapshot, encode_snapshot
>>> from draft_budget.models import DraftState
>>> text = encode_snapshot(DraftState(target_count=800))
>>> text
'{"typicalCount": 800, "sections": []}'
>>> decode_snapshot(text).target_count
800
>>> decode_snapshot("not json").sections
()
"""

from __future__ import annotations

import json
import logging
import typing as typ

from ._constants import SNAPSHOT_SECTIONS_KEY, SNAPSHOT_TARGET_KEY
from .models import DraftState
from .sections import Section

logger = logging.getLogger(__name__)


class SnapshotDecodeError(ValueError):
    """Raised when snapshot text does not describe a draft."""


def encode_snapshot(state: DraftState) -> str:
    """Return the JSON snapshot for ``state``; an absent target encodes as 0."""
    payload = {
        SNAPSHOT_TARGET_KEY: state.target_count or 0,
        SNAPSHOT_SECTIONS_KEY: [
            {
                "title": section.title,
                "ratio": section.ratio,
                "content": section.content,
            }
            for section in state.sections
        ],
    }
    return json.dumps(payload, ensure_ascii=False)


def decode_snapshot(text: str | None) -> DraftState:
    """Return the draft described by ``text`` or an empty draft.

    Parameters
    ----------
    text : str or None
        Snapshot text read from the store; ``None`` when nothing was stored.

    Returns
    -------
    DraftState
        The restored draft, or ``DraftState()`` when ``text`` is missing or
        malformed. A stored target of ``0`` is read back as absent.
    """
    if text is None:
        return DraftState()
    try:
        return parse_snapshot(text)
    except SnapshotDecodeError as exc:
        logger.debug("Discarding stored snapshot: %s", exc)
        return DraftState()


def parse_snapshot(text: str) -> DraftState:
    """Strictly parse ``text``, raising :class:`SnapshotDecodeError` on failure."""
    try:
        payload = json.loads(text)
    except (ValueError, RecursionError) as exc:
        msg = f"Snapshot is not valid JSON: {exc}"
        raise SnapshotDecodeError(msg) from exc
    if not isinstance(payload, dict):
        msg = "Snapshot must be a JSON object"
        raise SnapshotDecodeError(msg)

    target_count = _require_int(payload, SNAPSHOT_TARGET_KEY)
    raw_sections = payload.get(SNAPSHOT_SECTIONS_KEY)
    if not isinstance(raw_sections, list):
        msg = f"Snapshot field '{SNAPSHOT_SECTIONS_KEY}' must be a list"
        raise SnapshotDecodeError(msg)

    sections = tuple(_decode_section(entry) for entry in raw_sections)
    return DraftState(target_count=target_count or None, sections=sections)


def _decode_section(entry: object) -> Section:
    if not isinstance(entry, dict):
        msg = "Snapshot section entries must be objects"
        raise SnapshotDecodeError(msg)
    return Section(
        title=_require_str(entry, "title"),
        ratio=_require_int(entry, "ratio"),
        content=_require_str(entry, "content"),
    )


def _require_int(payload: typ.Mapping[str, object], key: str) -> int:
    value = payload.get(key)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    msg = f"Snapshot field '{key}' must be an integer, got {value!r}"
    raise SnapshotDecodeError(msg)


def _require_str(payload: typ.Mapping[str, object], key: str) -> str:
    value = payload.get(key)
    if isinstance(value, str):
        return value
    msg = f"Snapshot field '{key}' must be a string, got {value!r}"
    raise SnapshotDecodeError(msg)


__all__ = [
    "SnapshotDecodeError",
    "decode_snapshot",
    "encode_snapshot",
    "parse_snapshot",
]
