"""Reads extracted API metadata (JSON or YAML) into the nsdoc data model."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional, Tuple, Union

import yaml

from .logging import get_logger
from .models import MetadataError, Namespace, Var

_YAML_SUFFIXES = {".yml", ".yaml"}

logger = get_logger("loader")


@dataclass(frozen=True)
class ApiMetadata:
    """Project identity plus namespaces as produced by an extractor."""

    name: Optional[str]
    version: Optional[str]
    description: Optional[str]
    namespaces: Tuple[Namespace, ...]


def load_metadata(path: Path) -> ApiMetadata:
    """Load metadata from ``path``; the suffix selects JSON or YAML."""
    path = path.expanduser()
    if not path.exists():
        raise FileNotFoundError(f"Metadata file not found: {path}")
    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() in _YAML_SUFFIXES:
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise MetadataError(f"Failed to parse {path.name}: {exc}") from exc

    metadata = parse_metadata(data)
    logger.debug("Loaded %d namespaces from %s", len(metadata.namespaces), path)
    return metadata


def parse_metadata(data: Any) -> ApiMetadata:
    if not isinstance(data, Mapping):
        raise MetadataError("Metadata must contain a mapping at the root")
    raw_namespaces = data.get("namespaces") or []
    if not isinstance(raw_namespaces, list):
        raise MetadataError("'namespaces' must be a list")

    namespaces = tuple(parse_namespace(item) for item in raw_namespaces)
    names = [namespace.name for namespace in namespaces]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise MetadataError(f"Duplicate namespaces: {', '.join(duplicates)}")

    return ApiMetadata(
        name=_optional_str(data.get("name")),
        version=_optional_str(data.get("version")),
        description=_optional_str(data.get("description")),
        namespaces=namespaces,
    )


def parse_namespace(data: Any) -> Namespace:
    if not isinstance(data, Mapping):
        raise MetadataError("Each namespace must be a mapping")
    name = data.get("name")
    if not isinstance(name, str):
        raise MetadataError("Namespace is missing a 'name'")
    publics = data.get("publics") or []
    if not isinstance(publics, list):
        raise MetadataError(f"'publics' of {name} must be a list")
    return Namespace(
        name=name,
        doc=_optional_str(data.get("doc")),
        doc_format=_doc_format(data),
        publics=tuple(parse_var(item, context=name) for item in publics),
    )


def parse_var(data: Any, *, context: str, allow_members: bool = True) -> Var:
    if not isinstance(data, Mapping):
        raise MetadataError(f"Public vars of {context} must be mappings")
    name = data.get("name")
    if not isinstance(name, str) or not name:
        raise MetadataError(f"A var in {context} is missing a 'name'")

    raw_members = data.get("members") or []
    if raw_members and not allow_members:
        raise MetadataError(f"Member {context}/{name} cannot have members of its own")
    if not isinstance(raw_members, list):
        raise MetadataError(f"'members' of {context}/{name} must be a list")
    members = tuple(
        parse_var(item, context=f"{context}/{name}", allow_members=False) for item in raw_members
    )

    return Var(
        name=name,
        type=_optional_str(data.get("type")) or "var",
        arglists=_arglists(data.get("arglists"), f"{context}/{name}"),
        doc=_optional_str(data.get("doc")),
        doc_format=_doc_format(data),
        added=_optional_str(data.get("added")),
        deprecated=_deprecated(data.get("deprecated")),
        file=_optional_str(data.get("file")) or "",
        line=_line(data.get("line"), f"{context}/{name}"),
        path=_optional_str(data.get("path")) or "",
        members=members,
    )


def _doc_format(data: Mapping[str, Any]) -> Optional[str]:
    return _optional_str(data.get("doc_format", data.get("doc/format")))


def _arglists(value: Any, context: str) -> Tuple[Tuple[str, ...], ...]:
    if value is None:
        return ()
    if not isinstance(value, list) or not all(isinstance(item, list) for item in value):
        raise MetadataError(f"'arglists' of {context} must be a list of lists")
    return tuple(tuple(_arg_form(arg) for arg in arglist) for arglist in value)


def _arg_form(value: Any) -> str:
    # Destructuring forms arrive as nested lists; show them as vectors.
    if isinstance(value, list):
        return "[" + " ".join(_arg_form(item) for item in value) + "]"
    return str(value)


def _deprecated(value: Any) -> Union[bool, str, None]:
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, (str, int, float)):
        return str(value)
    return True


def _line(value: Any, context: str) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise MetadataError(f"'line' of {context} must be a positive integer")
    return value


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        return str(value)
    return None


__all__ = ["ApiMetadata", "load_metadata", "parse_metadata", "parse_namespace", "parse_var"]
