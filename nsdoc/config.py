"""Configuration loading for nsdoc (.nsdoc.yml)."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .models import SourceRule

CONFIG_FILENAME = ".nsdoc.yml"
DEFAULT_OUTPUT_DIR = "doc"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ProjectOverrides:
    """Project identity fields that take precedence over extracted metadata."""

    name: Optional[str] = None
    version: Optional[str] = None
    description: Optional[str] = None


@dataclass
class SourceConfig:
    """Settings for "view source" links."""

    dir_uri: Optional[str] = None
    linenum_anchor_prefix: Optional[str] = None
    uri_mapping: List[SourceRule] = field(default_factory=list)


@dataclass
class NsdocConfig:
    """Represents the settings defined in .nsdoc.yml."""

    root: Path
    project: ProjectOverrides = field(default_factory=ProjectOverrides)
    output_dir: Path | None = None
    doc_format: Optional[str] = None
    source: SourceConfig = field(default_factory=SourceConfig)
    templates_dir: Path | None = None

    def resolved_output_dir(self) -> Path:
        return self.output_dir or (self.root / DEFAULT_OUTPUT_DIR)


def load_config(config_path: Path) -> NsdocConfig:
    """Load configuration from disk; a missing file yields defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return NsdocConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    project_data = _as_dict(data.get("project"))
    project = ProjectOverrides(
        name=_as_str(project_data.get("name")),
        version=_as_str(project_data.get("version")),
        description=_as_str(project_data.get("description")),
    )

    source_data = _as_dict(data.get("source"))
    source = SourceConfig(
        dir_uri=_as_str(source_data.get("dir_uri")),
        linenum_anchor_prefix=_as_str(source_data.get("linenum_anchor_prefix")),
        uri_mapping=_parse_uri_mapping(source_data.get("uri_mapping")),
    )

    output_dir_str = _as_str(data.get("output_dir"))
    templates_dir_str = _as_str(data.get("templates_dir"))

    return NsdocConfig(
        root=root,
        project=project,
        output_dir=root / output_dir_str if output_dir_str else None,
        doc_format=_as_str(data.get("doc_format")),
        source=source,
        templates_dir=root / templates_dir_str if templates_dir_str else None,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _parse_uri_mapping(value: Any) -> List[SourceRule]:
    """Build ordered source rules from ``[{pattern, rewrite}, ...]``."""
    if value is None:
        return []
    if not isinstance(value, Sequence) or isinstance(value, str):
        raise ConfigError("source.uri_mapping must be a list of {pattern, rewrite} entries")
    rules: List[SourceRule] = []
    for index, entry in enumerate(value):
        entry_data = _as_dict(entry)
        pattern = _as_str(entry_data.get("pattern"))
        rewrite = _as_str(entry_data.get("rewrite"))
        if pattern is None or rewrite is None:
            raise ConfigError(f"source.uri_mapping[{index}] needs both 'pattern' and 'rewrite'")
        try:
            rules.append(SourceRule.from_template(pattern, rewrite))
        except re.error as exc:
            raise ConfigError(f"source.uri_mapping[{index}] has an invalid pattern: {exc}") from exc
        except ValueError as exc:
            raise ConfigError(f"source.uri_mapping[{index}] has an invalid rewrite: {exc}") from exc
    return rules


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None
