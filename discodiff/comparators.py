"""Scalar field comparison producing leaf diff entries."""

from __future__ import annotations

from typing import Optional

from .exceptions import PreconditionError
from .models import ChangeType, DiffEntry, ElementKind
from .options import DiffOptions


def _format_bool(value: bool) -> str:
    return "true" if value else "false"


def diff_string(field_id: str, old: str, new: str) -> Optional[DiffEntry]:
    """
    Compare two string field values.

    Args:
        field_id: Identifier reported for the field (e.g. 'Revision')
        old: The old value
        new: The new value

    Returns:
        None when equal, otherwise a MODIFY entry carrying both values
    """
    if not isinstance(old, str) or not isinstance(new, str):
        raise PreconditionError(
            f"String field '{field_id}' holds non-string values",
            {"field": field_id, "old_type": type(old).__name__, "new_type": type(new).__name__},
        )
    if old == new:
        return None
    return DiffEntry(
        change_type=ChangeType.MODIFY,
        element_kind=ElementKind.STRING_FIELD,
        element_id=field_id,
        old_value=old,
        new_value=new,
    )


def diff_bool(field_id: str, old: bool, new: bool) -> Optional[DiffEntry]:
    """Compare two boolean field values; values are rendered as true/false."""
    if not isinstance(old, bool) or not isinstance(new, bool):
        raise PreconditionError(
            f"Boolean field '{field_id}' holds non-boolean values",
            {"field": field_id, "old_type": type(old).__name__, "new_type": type(new).__name__},
        )
    if old == new:
        return None
    return DiffEntry(
        change_type=ChangeType.MODIFY,
        element_kind=ElementKind.BOOL_FIELD,
        element_id=field_id,
        old_value=_format_bool(old),
        new_value=_format_bool(new),
    )


def diff_description(old: str, new: str, options: DiffOptions) -> Optional[DiffEntry]:
    """Compare a description field, only when descriptions are enabled."""
    if not options.descriptions:
        return None
    return diff_string("Description", old, new)


def collect_diffs(*entries: Optional[DiffEntry]) -> list[DiffEntry]:
    """Drop empty comparison results, keeping field order."""
    return [e for e in entries if e is not None]
