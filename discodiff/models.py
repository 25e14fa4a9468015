"""Data models for the discodiff engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from .exceptions import PreconditionError
from .options import DiffOptions


class ChangeType(Enum):
    ADD = "ADD"
    MODIFY = "MODIFY"
    DELETE = "DELETE"


class ElementKind(Enum):
    SCHEMA = "SCHEMA"
    RESOURCE = "RESOURCE"
    METHOD = "METHOD"
    STRING_FIELD = "STRING_FIELD"
    BOOL_FIELD = "BOOL_FIELD"

    @property
    def is_scalar(self) -> bool:
        return self in (ElementKind.STRING_FIELD, ElementKind.BOOL_FIELD)


@dataclass(frozen=True)
class Schema:
    """A named type schema. Identity comes from its key in the document."""
    id: str = ""
    name: str = ""
    type: str = ""
    format: str = ""
    ref: str = ""
    default: str = ""
    pattern: str = ""
    description: str = ""
    # Not compared yet
    items: Optional[Schema] = None
    additional_properties: Optional[Schema] = None
    enums: tuple[str, ...] = ()
    enum_descriptions: tuple[str, ...] = ()


@dataclass(frozen=True)
class Method:
    """A single API method on a resource."""
    name: str = ""
    id: str = ""
    path: str = ""
    http_method: str = ""
    description: str = ""
    supports_media_download: bool = False
    # Not compared yet
    parameters: dict[str, dict] = field(default_factory=dict)
    parameter_order: tuple[str, ...] = ()
    request: str = ""
    response: str = ""
    scopes: tuple[str, ...] = ()
    media_upload: Optional[dict] = None


@dataclass(frozen=True)
class Resource:
    """A resource, which may contain nested resources and methods."""
    name: str = ""
    resources: tuple[Resource, ...] = ()
    methods: tuple[Method, ...] = ()


@dataclass(frozen=True)
class Document:
    """A parsed API description document."""
    id: str = ""
    name: str = ""
    revision: str = ""
    title: str = ""
    root_url: str = ""
    service_path: str = ""
    base_path: str = ""
    documentation_link: str = ""
    schemas: dict[str, Schema] = field(default_factory=dict)
    resources: tuple[Resource, ...] = ()


@dataclass(frozen=True)
class DiffEntry:
    """
    A single change between two documents.

    Composite entries (schemas, resources, methods) carry their field-level
    changes as children and never carry values. Scalar field entries carry
    old/new values rendered as text and never carry children.
    """
    change_type: ChangeType
    element_kind: ElementKind
    element_id: str
    old_value: str = ""
    new_value: str = ""
    children: tuple[DiffEntry, ...] = ()

    def __post_init__(self):
        if self.element_kind.is_scalar and self.children:
            raise PreconditionError(
                f"Field entry {self.element_id} cannot have children",
                {"element_id": self.element_id, "element_kind": self.element_kind.value},
            )
        if not self.element_kind.is_scalar and (self.old_value or self.new_value):
            raise PreconditionError(
                f"Composite entry {self.element_id} cannot carry values",
                {"element_id": self.element_id, "element_kind": self.element_kind.value},
            )

    def to_dict(self) -> dict:
        result: dict[str, Any] = {
            "change_type": self.change_type.value,
            "element_kind": self.element_kind.value,
            "element_id": self.element_id,
        }
        if self.element_kind.is_scalar:
            result["old_value"] = self.old_value
            result["new_value"] = self.new_value
        if self.children:
            result["children"] = [c.to_dict() for c in self.children]
        return result


@dataclass
class EngineConfig:
    """Global configuration for the comparison engine."""
    options: DiffOptions = DiffOptions.ALL
    max_depth: int = 100
