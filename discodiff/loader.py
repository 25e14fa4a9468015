"""Builds the document model from parsed Discovery documents."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Mapping

import yaml

from .exceptions import DocumentLoadError
from .models import Document, Method, Resource, Schema

logger = logging.getLogger(__name__)


def load_document(path: str | Path) -> Document:
    """
    Load a document from a JSON or YAML file.

    JSON is valid YAML, so a single YAML parse handles both formats.

    Args:
        path: Path to the document file

    Returns:
        The parsed Document
    """
    path = Path(path)
    if not path.exists():
        raise DocumentLoadError(f"Document file not found: {path}", path=str(path))

    logger.debug("Loading document from %s", path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise DocumentLoadError(
            f"Failed to read document file: {path}",
            path=str(path),
            reason=str(e),
        )

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise DocumentLoadError(
            f"Failed to parse document file: {path}",
            path=str(path),
            reason=str(e),
        )

    try:
        return parse_document(data)
    except DocumentLoadError as e:
        e.path = str(path)
        raise


def parse_document(data: Any) -> Document:
    """
    Convert a parsed Discovery mapping into a Document.

    Schemas keep their map keys as identity. Resources and methods are
    keyed by name in the source and become tuples sorted by that name.
    """
    _expect_mapping(data, "document")

    return Document(
        id=_get_str(data, "id", "document"),
        name=_get_str(data, "name", "document"),
        revision=_get_str(data, "revision", "document"),
        title=_get_str(data, "title", "document"),
        root_url=_get_str(data, "rootUrl", "document"),
        service_path=_get_str(data, "servicePath", "document"),
        base_path=_get_str(data, "basePath", "document"),
        documentation_link=_get_str(data, "documentationLink", "document"),
        schemas={
            name: _parse_schema(name, schema, f"schemas.{name}")
            for name, schema in _keyed_items(_get_mapping(data, "schemas", "document"), "schemas")
        },
        resources=_parse_resources(_get_mapping(data, "resources", "document"), "resources"),
    )


def _parse_schema(name: str, data: Any, where: str) -> Schema:
    _expect_mapping(data, where)

    items = data.get("items")
    additional = data.get("additionalProperties")

    return Schema(
        id=_get_str(data, "id", where),
        name=name,
        type=_get_str(data, "type", where),
        format=_get_str(data, "format", where),
        ref=_get_str(data, "$ref", where),
        default=_get_str(data, "default", where),
        pattern=_get_str(data, "pattern", where),
        description=_get_str(data, "description", where),
        items=_parse_schema("", items, f"{where}.items") if items is not None else None,
        additional_properties=(
            _parse_schema("", additional, f"{where}.additionalProperties")
            if isinstance(additional, Mapping) else None
        ),
        enums=_get_str_list(data, "enum", where),
        enum_descriptions=_get_str_list(data, "enumDescriptions", where),
    )


def _parse_resources(data: Mapping, where: str) -> tuple[Resource, ...]:
    resources = []
    for name in _sorted_keys(data, where):
        resource = data[name]
        path = f"{where}.{name}"
        _expect_mapping(resource, path)
        resources.append(Resource(
            name=name,
            resources=_parse_resources(_get_mapping(resource, "resources", path), f"{path}.resources"),
            methods=_parse_methods(_get_mapping(resource, "methods", path), f"{path}.methods"),
        ))
    return tuple(resources)


def _parse_methods(data: Mapping, where: str) -> tuple[Method, ...]:
    methods = []
    for name in _sorted_keys(data, where):
        method = data[name]
        path = f"{where}.{name}"
        _expect_mapping(method, path)

        media_download = method.get("supportsMediaDownload", False)
        if not isinstance(media_download, bool):
            raise DocumentLoadError(
                f"Field 'supportsMediaDownload' at {path} must be a boolean",
                reason=f"got {type(media_download).__name__}",
            )

        media_upload = method.get("mediaUpload")
        if media_upload is not None:
            _expect_mapping(media_upload, f"{path}.mediaUpload")

        methods.append(Method(
            name=name,
            id=_get_str(method, "id", path),
            path=_get_str(method, "path", path),
            http_method=_get_str(method, "httpMethod", path),
            description=_get_str(method, "description", path),
            supports_media_download=media_download,
            parameters=dict(_get_mapping(method, "parameters", path)),
            parameter_order=_get_str_list(method, "parameterOrder", path),
            request=_get_ref(method, "request", path),
            response=_get_ref(method, "response", path),
            scopes=_get_str_list(method, "scopes", path),
            media_upload=dict(media_upload) if media_upload is not None else None,
        ))
    return tuple(methods)


def _expect_mapping(value: Any, where: str):
    if not isinstance(value, Mapping):
        raise DocumentLoadError(
            f"Expected an object at {where}",
            reason=f"got {type(value).__name__}",
        )


def _get_str(data: Mapping, key: str, where: str) -> str:
    """Read an optional string field; unquoted YAML numbers are accepted as text."""
    value = data.get(key)
    if value is None:
        return ""
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise DocumentLoadError(
            f"Field '{key}' at {where} must be a string",
            reason=f"got {type(value).__name__}",
        )
    return str(value)


def _get_mapping(data: Mapping, key: str, where: str) -> Mapping:
    value = data.get(key)
    if value is None:
        return {}
    _expect_mapping(value, f"{where}.{key}")
    return value


def _get_str_list(data: Mapping, key: str, where: str) -> tuple[str, ...]:
    value = data.get(key)
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise DocumentLoadError(
            f"Field '{key}' at {where} must be a list of strings",
            reason=f"got {value!r}",
        )
    return tuple(value)


def _get_ref(data: Mapping, key: str, where: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    _expect_mapping(value, f"{where}.{key}")
    return _get_str(value, "$ref", f"{where}.{key}")


def _sorted_keys(data: Mapping, where: str) -> list[str]:
    for key in data:
        if not isinstance(key, str):
            raise DocumentLoadError(
                f"Names under {where} must be strings",
                reason=f"got {key!r}",
            )
    return sorted(data)


def _keyed_items(data: Mapping, where: str) -> list[tuple[str, Any]]:
    return [(key, data[key]) for key in _sorted_keys(data, where)]
