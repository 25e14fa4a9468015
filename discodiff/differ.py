"""Keyed-collection reconciliation and per-element comparison."""

from __future__ import annotations

from dataclasses import replace
from typing import Any, Callable, Iterable, Mapping, TypeVar

from .comparators import collect_diffs, diff_bool, diff_description, diff_string
from .exceptions import MaxDepthExceededError, PreconditionError
from .models import (
    ChangeType,
    DiffEntry,
    Document,
    ElementKind,
    Method,
    Resource,
    Schema,
)
from .options import DiffOptions


T = TypeVar("T")


def amend_change_type(
    entries: Iterable[DiffEntry],
    change_type: ChangeType
) -> tuple[DiffEntry, ...]:
    """Return copies of entries with change_type applied to the whole subtree."""
    return tuple(
        replace(
            e,
            change_type=change_type,
            children=amend_change_type(e.children, change_type),
        )
        for e in entries
    )


def index_by_name(
    items: Iterable[Any],
    element_type: type,
    what: str
) -> dict[str, Any]:
    """
    Key a sequence of named elements by their name.

    Args:
        items: Resources or methods
        element_type: Class every item must be an instance of
        what: Collection label used in error messages

    Returns:
        Mapping from name to element
    """
    _require(items, (tuple, list), what)

    result = {}
    for item in items:
        _require(item, element_type, what)
        name = item.name
        _require(name, str, f"{what} name")
        if name in result:
            raise PreconditionError(
                f"Duplicate name '{name}' in {what}",
                {"collection": what, "name": name},
            )
        result[name] = item
    return result


def reconcile(
    old: Mapping[str, T],
    new: Mapping[str, T],
    *,
    kind: ElementKind,
    make_id: Callable[[str], str],
    zero: Callable[[], T],
    compare: Callable[[T, T, str], list[DiffEntry]],
) -> list[DiffEntry]:
    """
    Pair old and new elements by key and classify each pairing.

    Keys are walked in sorted order. An element only in new is compared
    against zero() and reported as an addition if that yields anything. An
    element only in old is reported as a deletion without children. An
    element in both is reported as modified when compare() finds changes.
    """
    diffs = []

    for key in sorted(set(old) | set(new)):
        element_id = make_id(key)

        if key not in old:
            children = compare(zero(), new[key], element_id)
            if children:
                diffs.append(DiffEntry(
                    change_type=ChangeType.ADD,
                    element_kind=kind,
                    element_id=element_id,
                    children=amend_change_type(children, ChangeType.ADD),
                ))
            continue

        if key not in new:
            diffs.append(DiffEntry(
                change_type=ChangeType.DELETE,
                element_kind=kind,
                element_id=element_id,
            ))
            continue

        children = compare(old[key], new[key], element_id)
        if children:
            diffs.append(DiffEntry(
                change_type=ChangeType.MODIFY,
                element_kind=kind,
                element_id=element_id,
                children=tuple(children),
            ))

    return diffs


def _require(value: Any, expected: type | tuple[type, ...], element_id: str):
    if not isinstance(value, expected):
        types = expected if isinstance(expected, tuple) else (expected,)
        expected_name = " or ".join(t.__name__ for t in types)
        raise PreconditionError(
            f"Expected {expected_name} at {element_id}, got {type(value).__name__}",
            {"element_id": element_id, "expected": expected_name,
             "actual": type(value).__name__},
        )


class Differ:
    """
    Compares two documents category by category.

    Holds only configuration, so one instance can serve any number of
    comparisons.
    """

    def __init__(self, options: DiffOptions, max_depth: int = 100):
        self.options = options
        self.max_depth = max_depth

    def compare_documents(self, old: Document, new: Document) -> list[DiffEntry]:
        """Compare two documents in the fixed category order."""
        _require(old, Document, "old document")
        _require(new, Document, "new document")

        diffs = self.compare_identifiers(old, new)
        if self.options.versioning:
            diffs.extend(self.compare_versioning(old, new))
        if self.options.service:
            diffs.extend(self.compare_service(old, new))
        if self.options.schemas:
            diffs.extend(self.compare_schemas(old.schemas, new.schemas))
        if self.options.resources:
            diffs.extend(self.compare_resources(old.resources, new.resources, "", 1))
        return diffs

    def compare_identifiers(self, old: Document, new: Document) -> list[DiffEntry]:
        return collect_diffs(
            diff_string("ID", old.id, new.id),
            diff_string("Name", old.name, new.name),
        )

    def compare_versioning(self, old: Document, new: Document) -> list[DiffEntry]:
        return collect_diffs(
            diff_string("Revision", old.revision, new.revision),
        )

    def compare_service(self, old: Document, new: Document) -> list[DiffEntry]:
        # TODO: compare Features once the model carries them as a string list
        return collect_diffs(
            diff_string("Title", old.title, new.title),
            diff_string("RootURL", old.root_url, new.root_url),
            diff_string("ServicePath", old.service_path, new.service_path),
            diff_string("BasePath", old.base_path, new.base_path),
            diff_string("DocumentationLink", old.documentation_link, new.documentation_link),
        )

    def compare_schemas(
        self,
        old: Mapping[str, Schema],
        new: Mapping[str, Schema],
    ) -> list[DiffEntry]:
        for schemas in (old, new):
            _require(schemas, Mapping, "Schemas")
            for key, schema in schemas.items():
                _require(key, str, "Schemas")
                _require(schema, Schema, f"Schemas.{key}")

        return reconcile(
            old,
            new,
            kind=ElementKind.SCHEMA,
            make_id=lambda key: f"Schemas.{key}",
            zero=Schema,
            compare=self.compare_single_schema,
        )

    def compare_single_schema(
        self,
        old: Schema,
        new: Schema,
        element_id: str
    ) -> list[DiffEntry]:
        _require(old, Schema, element_id)
        _require(new, Schema, element_id)

        # items, additional_properties and enums are not compared
        return collect_diffs(
            diff_string("ID", old.id, new.id),
            diff_string("Type", old.type, new.type),
            diff_string("Format", old.format, new.format),
            diff_description(old.description, new.description, self.options),
            diff_string("Ref", old.ref, new.ref),
            diff_string("Default", old.default, new.default),
            diff_string("Pattern", old.pattern, new.pattern),
            diff_string("Name", old.name, new.name),
        )

    def compare_resources(
        self,
        old: Iterable[Resource],
        new: Iterable[Resource],
        parent_id: str,
        depth: int,
    ) -> list[DiffEntry]:
        """Reconcile two resource lists by name, recursing into each resource."""
        prefix = f"{parent_id}.Resources" if parent_id else "Resources"
        old_map = index_by_name(old, Resource, prefix)
        new_map = index_by_name(new, Resource, prefix)
        if depth > self.max_depth and (old_map or new_map):
            raise MaxDepthExceededError(self.max_depth, prefix)

        def compare(old_resource: Resource, new_resource: Resource, element_id: str):
            return self.compare_single_resource(old_resource, new_resource, element_id, depth)

        return reconcile(
            old_map,
            new_map,
            kind=ElementKind.RESOURCE,
            make_id=lambda key: f"{prefix}.{key}",
            zero=Resource,
            compare=compare,
        )

    def compare_single_resource(
        self,
        old: Resource,
        new: Resource,
        element_id: str,
        depth: int,
    ) -> list[DiffEntry]:
        _require(old, Resource, element_id)
        _require(new, Resource, element_id)

        diffs = collect_diffs(diff_string("Name", old.name, new.name))
        diffs.extend(self.compare_resources(old.resources, new.resources, element_id, depth + 1))
        diffs.extend(self.compare_methods(old.methods, new.methods, element_id))
        return diffs

    def compare_methods(
        self,
        old: Iterable[Method],
        new: Iterable[Method],
        parent_id: str,
    ) -> list[DiffEntry]:
        prefix = f"{parent_id}.Methods"
        return reconcile(
            index_by_name(old, Method, prefix),
            index_by_name(new, Method, prefix),
            kind=ElementKind.METHOD,
            make_id=lambda key: f"{prefix}.{key}",
            zero=Method,
            compare=self.compare_single_method,
        )

    def compare_single_method(
        self,
        old: Method,
        new: Method,
        element_id: str
    ) -> list[DiffEntry]:
        _require(old, Method, element_id)
        _require(new, Method, element_id)

        # parameters, request/response, scopes and media upload are not compared
        return collect_diffs(
            diff_string("Name", old.name, new.name),
            diff_string("ID", old.id, new.id),
            diff_string("Path", old.path, new.path),
            diff_string("HTTPMethod", old.http_method, new.http_method),
            diff_description(old.description, new.description, self.options),
            diff_bool(
                "SupportsMediaDownload",
                old.supports_media_download,
                new.supports_media_download,
            ),
        )
