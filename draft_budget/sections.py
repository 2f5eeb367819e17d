"""Ordered section store operations.

A store is a plain tuple of :class:`Section` values kept in display order.
Every operation returns a new tuple and leaves its input untouched, so the
state machine can swap stores wholesale after each intent.

Sections are matched by ``title``. Titles are not required to be unique:
updates apply to every section sharing the title and removal drops every
match.

Examples
--------
>>> from draft_budget.sections import add_section, update_ratio
>>> store = add_section((), "Intro")
>>> store = update_ratio(store, "Intro", "3")
>>> store[0].ratio
3
"""

from __future__ import annotations

import dataclasses as dc
import re
import typing as typ

from ._constants import DEFAULT_SECTION_TEMPLATE

_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


@dc.dataclass(frozen=True, slots=True)
class Section:
    """A named slice of the draft with an allocation ratio and content."""

    title: str
    ratio: int = 1
    content: str = ""


SectionStore = tuple[Section, ...]


def parse_int(text: str) -> int | None:
    """Return ``text`` parsed as a base-10 integer, or None when it is not one.

    Only an optional sign followed by ASCII digits is accepted; surrounding
    whitespace, decimals, and exponents are rejected.
    """
    if not _INTEGER_PATTERN.fullmatch(text):
        return None
    try:
        return int(text)
    except ValueError:  # exceeds the interpreter's digit limit
        return None


def add_section(store: SectionStore, title: str) -> SectionStore:
    """Append a new section with ratio 1 and empty content."""
    return (*store, Section(title=title))


def remove_section(store: SectionStore, title: str) -> SectionStore:
    """Drop every section whose title equals ``title``."""
    return tuple(section for section in store if section.title != title)


def update_content(store: SectionStore, title: str, content: str) -> SectionStore:
    """Replace the content of every section matching ``title``."""
    return _map_matching(
        store, title, lambda section: dc.replace(section, content=content)
    )


def update_ratio(store: SectionStore, title: str, ratio_text: str) -> SectionStore:
    """Replace the ratio of matching sections when ``ratio_text`` parses.

    A value that fails to parse leaves the store unchanged.
    """
    ratio = parse_int(ratio_text)
    if ratio is None:
        return store
    return _map_matching(
        store, title, lambda section: dc.replace(section, ratio=ratio)
    )


def reset_to_defaults() -> SectionStore:
    """Return the fixed five-section template with empty content."""
    return tuple(
        Section(title=title, ratio=ratio) for title, ratio in DEFAULT_SECTION_TEMPLATE
    )


def _map_matching(
    store: SectionStore, title: str, update: typ.Callable[[Section], Section]
) -> SectionStore:
    return tuple(
        update(section) if section.title == title else section for section in store
    )


__all__ = [
    "Section",
    "SectionStore",
    "add_section",
    "parse_int",
    "remove_section",
    "reset_to_defaults",
    "update_content",
    "update_ratio",
]
