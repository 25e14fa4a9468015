"""Text rendering of diff trees."""

from __future__ import annotations

from typing import Iterable

from .models import ChangeType, DiffEntry, ElementKind


CHANGE_MARKERS = {
    ChangeType.ADD: "+",
    ChangeType.MODIFY: "M",
    ChangeType.DELETE: "-",
}

KIND_MARKERS = {
    ElementKind.SCHEMA: "<Schema> ",
    ElementKind.RESOURCE: "<Resource> ",
    ElementKind.METHOD: "<Method> ",
    ElementKind.STRING_FIELD: ".",
    ElementKind.BOOL_FIELD: ".",
}


def render_entry(entry: DiffEntry) -> str:
    """Render a single entry as one line, without indentation or newline."""
    line = (
        f"{CHANGE_MARKERS.get(entry.change_type, '?')} "
        f"{KIND_MARKERS.get(entry.element_kind, '???')}{entry.element_id}"
    )
    if entry.element_kind.is_scalar:
        if entry.change_type == ChangeType.MODIFY:
            line += f' [ "{entry.old_value}" ==> "{entry.new_value}" ]'
        elif entry.change_type == ChangeType.ADD and entry.new_value:
            line += f' [ "{entry.new_value}" ]'
    return line


def render_diff(entries: Iterable[DiffEntry]) -> str:
    """
    Render a diff tree as indented text.

    Entries are written depth-first, children two spaces deeper than their
    parent, in the order the tree already has.
    """
    lines: list[str] = []
    _render_into(lines, entries, 0)
    return "".join(lines)


def _render_into(lines: list[str], entries: Iterable[DiffEntry], level: int):
    for entry in entries:
        lines.append("  " * level + render_entry(entry) + "\n")
        _render_into(lines, entry.children, level + 1)
