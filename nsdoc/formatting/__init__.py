"""Doc-format plugins and the registry that dispatches between them."""

from __future__ import annotations

from importlib import metadata as importlib_metadata
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Protocol, Union

from markupsafe import Markup

from ..logging import get_logger
from ..models import Namespace, Project, Var
from .base import DocFormatter
from .markdown_format import MarkdownFormatter
from .plaintext import PlainTextFormatter, add_anchors
from .summary import summary

_ENTRY_POINT_GROUP = "nsdoc.doc_formats"

DEFAULT_FORMAT = "plaintext"

_BUILTIN_FACTORIES: Dict[str, Callable[[], DocFormatter]] = {
    "plaintext": PlainTextFormatter,
    "markdown": MarkdownFormatter,
}

_logger = get_logger("formatting")


class Documented(Protocol):
    doc: Optional[str]
    doc_format: Optional[str]


class UnknownDocFormatError(LookupError):
    """Raised when a doc is tagged with a format nobody registered."""

    def __init__(self, tag: str, known: Iterable[str] = ()) -> None:
        self.tag = tag
        self.known = sorted(known)
        available = ", ".join(self.known) or "none"
        super().__init__(f"Unknown doc format '{tag}' (registered: {available})")


def normalise_tag(tag: str) -> str:
    """Lower-case ``tag`` and drop a leading ``:`` so ``:markdown`` == ``markdown``."""
    return tag.strip().lstrip(":").lower()


class DocFormatRegistry:
    """Explicit mapping from doc-format tag to formatter."""

    def __init__(self, formatters: Optional[Mapping[str, DocFormatter]] = None) -> None:
        self._formatters: Dict[str, DocFormatter] = {}
        for tag, formatter in (formatters or {}).items():
            self.register(tag, formatter)

    def register(self, tag: str, formatter: DocFormatter, *, replace: bool = False) -> None:
        if not isinstance(formatter, DocFormatter):
            raise TypeError(f"Formatter for '{tag}' must be a DocFormatter instance")
        key = normalise_tag(tag)
        if not key:
            raise ValueError("Doc format tag must not be empty")
        if key in self._formatters and not replace:
            raise ValueError(f"Doc format '{key}' is already registered")
        self._formatters[key] = formatter

    def get(self, tag: str) -> DocFormatter:
        formatter = self._formatters.get(normalise_tag(tag))
        if formatter is None:
            raise UnknownDocFormatError(tag, self._formatters)
        return formatter

    def tags(self) -> List[str]:
        return sorted(self._formatters)

    def __contains__(self, tag: object) -> bool:
        return isinstance(tag, str) and normalise_tag(tag) in self._formatters


def default_registry() -> DocFormatRegistry:
    """Return a registry with the built-in formats plus installed plugins."""
    registry = DocFormatRegistry()
    for tag, factory in _BUILTIN_FACTORIES.items():
        registry.register(tag, factory())

    for entry in _iter_entry_points():
        try:
            loaded = entry.load()
        except Exception as exc:  # pragma: no cover - defensive guard
            raise RuntimeError(f"Failed to load doc format entry point '{entry.name}': {exc}") from exc
        registry.register(entry.name, _coerce_formatter(loaded), replace=True)
        _logger.debug("Registered doc format plugin %s", entry.name)

    return registry


def resolve_format(project: Project, metadata: Documented) -> str:
    """Return the format tag ``metadata`` should be rendered with."""
    return metadata.doc_format or project.doc_format or DEFAULT_FORMAT


def format_doc(
    project: Project,
    metadata: Union[Namespace, Var, Documented],
    registry: Optional[DocFormatRegistry] = None,
) -> Optional[Markup]:
    """Format the docstring of a var or namespace into HTML."""
    registry = registry if registry is not None else default_registry()
    formatter = registry.get(resolve_format(project, metadata))
    return formatter.render(metadata.doc)


def _coerce_formatter(obj: object) -> DocFormatter:
    if isinstance(obj, DocFormatter):
        return obj
    if isinstance(obj, type) and issubclass(obj, DocFormatter):
        return obj()
    if callable(obj):
        instance = obj()
        if isinstance(instance, DocFormatter):
            return instance
    raise TypeError("Doc format entry point must be a DocFormatter subclass or factory")


def _iter_entry_points() -> Iterable[importlib_metadata.EntryPoint]:
    return importlib_metadata.entry_points(group=_ENTRY_POINT_GROUP)


__all__ = [
    "DEFAULT_FORMAT",
    "DocFormatRegistry",
    "DocFormatter",
    "MarkdownFormatter",
    "PlainTextFormatter",
    "UnknownDocFormatError",
    "add_anchors",
    "default_registry",
    "format_doc",
    "normalise_tag",
    "resolve_format",
    "summary",
]
