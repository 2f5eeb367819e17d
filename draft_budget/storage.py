"""Key-value stores that hold draft snapshots between sessions.

A store only needs ``get`` and ``set`` over string keys and values. Two
implementations ship with the package:

* :class:`MemoryStore` keeps values in a dictionary, which suits tests and
  callers that embed the draft model.
* :class:`JsonFileStore` keeps a flat JSON object on disk and rewrites it on
  every ``set`` so the file always matches the last completed write.
"""

from __future__ import annotations

import json
import logging
import typing as typ

if typ.TYPE_CHECKING:
    from pathlib import Path

logger = logging.getLogger(__name__)


class StorageError(RuntimeError):
    """Raised when a store file exists but cannot be read as string pairs."""


class KeyValueStore(typ.Protocol):
    """Read/write contract shared by every snapshot store."""

    def get(self, key: str) -> str | None:
        """Return the value stored under ``key`` or None."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...


class MemoryStore:
    """Dictionary-backed store."""

    def __init__(self, initial: typ.Mapping[str, str] | None = None) -> None:
        self._values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._values.get(key)

    def set(self, key: str, value: str) -> None:
        self._values[key] = value


class JsonFileStore:
    """Store values as a JSON object in a single UTF-8 file.

    Parameters
    ----------
    path : Path
        Location of the JSON file. It does not need to exist yet; parent
        directories are created on the first write.

    Notes
    -----
    The file is read on every ``get`` and rewritten in full on every ``set``.
    Drafts are small and writes happen once per intent, so no caching is
    attempted.
    """

    def __init__(self, path: Path) -> None:
        self.path = path

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        values = self._read()
        values[key] = value
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps(values, ensure_ascii=False, indent=2) + "\n", encoding="utf-8"
        )
        logger.debug(
            "Stored %d characters under '%s' in %s", len(value), key, self.path
        )

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            loaded = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except json.JSONDecodeError as exc:
            msg = f"Store file '{self.path}' is not valid JSON"
            raise StorageError(msg) from exc
        if not isinstance(loaded, dict) or not all(
            isinstance(value, str) for value in loaded.values()
        ):
            msg = f"Store file '{self.path}' must map keys to strings"
            raise StorageError(msg)
        return loaded


__all__ = ["JsonFileStore", "KeyValueStore", "MemoryStore", "StorageError"]
