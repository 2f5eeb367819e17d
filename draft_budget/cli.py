"""Cyclopts CLI entrypoint for editing a character-budgeted draft.

The ``draft`` console script loads the stored draft, applies one user action
as a sequence of intents, writes the snapshot back, and prints the updated
listing. Typical usage sets a target, shapes the sections, then fills them:

>>> from draft_budget.cli import app
>>> app(["reset", "--yes"])  # doctest: +SKIP
>>> app(["target", "2000"])  # doctest: +SKIP
>>> app(["write", "要約", "--file", "summary.txt"])  # doctest: +SKIP

Options can also be supplied through ``DRAFT_BUDGET_*`` environment variables,
for example ``DRAFT_BUDGET_STORE=/tmp/store.json``.
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

import cyclopts
from cyclopts import App, Parameter

from .config import DEFAULT_CONFIG_PATH, SettingsError, load_settings
from .renderer import TextViewRenderer, confirmation_prompt
from .session import DraftSession
from .state import (
    AddSection,
    CancelConfirmation,
    Confirm,
    RequestDelete,
    RequestReset,
    SetPendingTitle,
    SetSectionContent,
    SetSectionRatio,
    SetTargetCount,
)
from .storage import JsonFileStore, StorageError
from .view import build_view

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .state import Intent

app = App(name="draft", config=cyclopts.config.Env("DRAFT_BUDGET_", command=False))  # type: ignore[unknown-argument]

ConfigOption = typ.Annotated[
    Path, Parameter(help="Path to settings TOML", env_var="DRAFT_BUDGET_CONFIG_FILE")
]
StoreOption = typ.Annotated[
    Path | None, Parameter(help="Override the snapshot store file")
]
KeyOption = typ.Annotated[str | None, Parameter(help="Override the storage key")]
VerboseOption = typ.Annotated[bool, Parameter(help="Log store activity to stderr")]
YesOption = typ.Annotated[bool, Parameter(help="Confirm without prompting")]


def _open_session(
    *, config: Path, store: Path | None, key: str | None, verbose: bool
) -> DraftSession:
    """Load settings, apply CLI overrides, and open the stored draft.

    Unreadable settings or store files end the command with a one-line error
    on stderr and exit status 1.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")
    try:
        settings = load_settings(config)
        store_path = store or settings.store_path
        return DraftSession.load(
            JsonFileStore(store_path), key=key or settings.storage_key
        )
    except (SettingsError, StorageError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc


def _show(session: DraftSession) -> None:
    print(TextViewRenderer().render(build_view(session.state)), end="")


def _run(
    intents: cabc.Iterable[Intent],
    *,
    config: Path,
    store: Path | None,
    key: str | None,
    verbose: bool,
) -> None:
    session = _open_session(config=config, store=store, key=key, verbose=verbose)
    session.dispatch_all(intents)
    _show(session)


def _confirm(session: DraftSession, *, assume_yes: bool) -> bool:
    """Resolve the open dialog, asking on stdin unless ``assume_yes``."""
    prompt = confirmation_prompt(session.state.confirmation)
    accepted = assume_yes
    if not assume_yes and prompt:
        try:
            answer = input(f"{prompt} [y/N] ")
        except EOFError:
            answer = ""
        accepted = answer.strip().lower() in {"y", "yes"}
    session.dispatch(Confirm() if accepted else CancelConfirmation())
    return accepted


@app.command(help="Show the draft with per-section budgets.")
def show(
    *,
    config: ConfigOption = DEFAULT_CONFIG_PATH,
    store: StoreOption = None,
    key: KeyOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Print the current draft without changing it."""
    _run((), config=config, store=store, key=key, verbose=verbose)


@app.command(help="Set the target total character count.")
def target(
    value: str,
    *,
    config: ConfigOption = DEFAULT_CONFIG_PATH,
    store: StoreOption = None,
    key: KeyOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Set the target count; text that is not an integer clears it.

    Parameters
    ----------
    value : str
        Raw target text, for example ``"2000"``.
    config : Path, optional
        Settings TOML path (``DRAFT_BUDGET_CONFIG_FILE``).
    store : Path or None, optional
        Snapshot store file overriding the settings.
    key : str or None, optional
        Storage key overriding the settings.
    verbose : bool, optional
        Emit debug logging for store writes.
    """
    _run(
        [SetTargetCount(value)], config=config, store=store, key=key, verbose=verbose
    )


@app.command(help="Set the ratio of a section.")
def ratio(
    title: str,
    value: str,
    *,
    config: ConfigOption = DEFAULT_CONFIG_PATH,
    store: StoreOption = None,
    key: KeyOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Set the ratio of every section titled ``title``; bad numbers are ignored."""
    _run(
        [SetSectionRatio(title, value)],
        config=config,
        store=store,
        key=key,
        verbose=verbose,
    )


@app.command(help="Replace the content of a section.")
def write(
    title: str,
    *,
    text: typ.Annotated[
        str | None, Parameter(help="Content given inline")
    ] = None,
    file: typ.Annotated[
        Path | None, Parameter(help="Read content from a UTF-8 file")
    ] = None,
    config: ConfigOption = DEFAULT_CONFIG_PATH,
    store: StoreOption = None,
    key: KeyOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Replace a section's content from ``--text``, ``--file``, or stdin.

    Content read from a file or stdin loses its trailing newlines so an
    editor's final line break does not count against the budget.

    Raises
    ------
    ValueError
        If both ``--text`` and ``--file`` are supplied.
    """
    if text is not None and file is not None:
        msg = "Pass either --text or --file, not both."
        raise ValueError(msg)
    if text is not None:
        content = text
    elif file is not None:
        content = file.read_text(encoding="utf-8").rstrip("\n")
    else:
        content = sys.stdin.read().rstrip("\n")
    _run(
        [SetSectionContent(title, content)],
        config=config,
        store=store,
        key=key,
        verbose=verbose,
    )


@app.command(help="Append a new section with ratio 1.")
def add(
    title: str,
    *,
    config: ConfigOption = DEFAULT_CONFIG_PATH,
    store: StoreOption = None,
    key: KeyOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Append an empty section titled ``title`` to the end of the draft."""
    _run(
        [SetPendingTitle(title), AddSection()],
        config=config,
        store=store,
        key=key,
        verbose=verbose,
    )


@app.command(help="Delete every section with the given title.")
def delete(
    title: str,
    *,
    yes: YesOption = False,
    config: ConfigOption = DEFAULT_CONFIG_PATH,
    store: StoreOption = None,
    key: KeyOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Ask for confirmation, then delete the sections titled ``title``."""
    session = _open_session(config=config, store=store, key=key, verbose=verbose)
    session.dispatch(RequestDelete(title))
    if not _confirm(session, assume_yes=yes):
        print("Cancelled.")
    _show(session)


@app.command(help="Replace all sections with the default template.")
def reset(
    *,
    yes: YesOption = False,
    config: ConfigOption = DEFAULT_CONFIG_PATH,
    store: StoreOption = None,
    key: KeyOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Ask for confirmation, then restore the five default sections."""
    session = _open_session(config=config, store=store, key=key, verbose=verbose)
    session.dispatch(RequestReset())
    if not _confirm(session, assume_yes=yes):
        print("Cancelled.")
    _show(session)


@app.command(help="Print every section's content joined in order.")
def copy(
    *,
    config: ConfigOption = DEFAULT_CONFIG_PATH,
    store: StoreOption = None,
    key: KeyOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Print the concatenated draft text for pasting elsewhere."""
    session = _open_session(config=config, store=store, key=key, verbose=verbose)
    print(build_view(session.state).combined_text)


def main() -> None:
    """Invoke the Cyclopts application that powers the ``draft`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
