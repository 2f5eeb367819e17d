"""Load user settings for the draft CLI from TOML.

Settings live in ``~/.config/draft-budget/config.toml`` unless the
``DRAFT_BUDGET_CONFIG_FILE`` environment variable points elsewhere. Only the
``[storage]`` table is read:

.. code-block:: toml

    [storage]
    path = "~/.local/share/draft-budget/store.json"
    key = "draft-budget"

A missing file yields :class:`DraftSettings` defaults; every key is optional.
"""

from __future__ import annotations

import dataclasses as dc
import os
import typing as typ
from pathlib import Path

import tomlkit
from tomlkit.exceptions import ParseError

from ._constants import DEFAULT_STORAGE_KEY

DEFAULT_CONFIG_PATH = Path(
    os.getenv(
        "DRAFT_BUDGET_CONFIG_FILE",
        Path.home() / ".config" / "draft-budget" / "config.toml",
    )
)
DEFAULT_STORE_PATH = Path.home() / ".local" / "share" / "draft-budget" / "store.json"


class SettingsError(ValueError):
    """Raised when the settings file is unreadable or has mistyped values."""


@dc.dataclass(slots=True)
class DraftSettings:
    """Where the draft snapshot is stored."""

    store_path: Path = DEFAULT_STORE_PATH
    storage_key: str = DEFAULT_STORAGE_KEY


def load_settings(path: Path = DEFAULT_CONFIG_PATH) -> DraftSettings:
    """Load settings from ``path``, falling back to defaults when it is absent.

    Parameters
    ----------
    path : Path, optional
        TOML settings file. Defaults to ``DEFAULT_CONFIG_PATH``.

    Returns
    -------
    DraftSettings
        Settings with any values from the ``[storage]`` table applied.

    Raises
    ------
    SettingsError
        If the file cannot be parsed or a ``[storage]`` value has the wrong
        type.
    """
    if not path.exists():
        return DraftSettings()
    try:
        document = tomlkit.parse(path.read_text(encoding="utf-8"))
    except ParseError as exc:
        msg = f"Unable to parse settings TOML at {path}"
        raise SettingsError(msg) from exc

    storage = document.get("storage") or {}
    if not isinstance(storage, typ.Mapping):
        msg = f"'storage' in {path} must be a table"
        raise SettingsError(msg)

    defaults = DraftSettings()
    store_path = _optional_str(storage, "path", path)
    storage_key = _optional_str(storage, "key", path)
    return DraftSettings(
        store_path=Path(store_path).expanduser() if store_path else defaults.store_path,
        storage_key=storage_key or defaults.storage_key,
    )


def _optional_str(
    table: typ.Mapping[str, typ.Any], key: str, path: Path
) -> str | None:
    value = table.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        msg = f"'storage.{key}' in {path} must be a string"
        raise SettingsError(msg)
    text = str(value).strip()
    return text or None


__all__ = [
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_STORE_PATH",
    "DraftSettings",
    "SettingsError",
    "load_settings",
]
