"""Core data models shared across nsdoc components."""

import re
import string
from dataclasses import dataclass, field
from typing import Callable, Optional, Tuple, Union


class MetadataError(ValueError):
    """Raised when API metadata is malformed or inconsistent."""


class NamespaceNameError(MetadataError):
    """Raised for namespace names that cannot be placed in the sidebar tree."""


def split_namespace(name: str) -> Tuple[str, ...]:
    """Split a dotted namespace name into its segments."""
    return tuple(name.split("."))


def validate_namespace_name(name: str) -> str:
    if not isinstance(name, str) or not name:
        raise NamespaceNameError("Namespace name must be a non-empty string")
    if any(not segment for segment in split_namespace(name)):
        raise NamespaceNameError(f"Namespace name has an empty segment: {name!r}")
    return name


@dataclass(frozen=True)
class SourceRule:
    """Maps vars whose source path matches ``pattern`` to a rewritten location."""

    pattern: re.Pattern[str]
    rewrite: Callable[[str], str]

    @classmethod
    def from_template(cls, pattern: str, template: str) -> "SourceRule":
        """Build a rule whose rewrite formats ``template`` with ``{file}``.

        Raises ``ValueError`` when the template uses any other field.
        """
        compiled = re.compile(pattern)
        for _, field_name, _, _ in string.Formatter().parse(template):
            if field_name is not None and field_name != "file":
                raise ValueError(f"Unsupported field {{{field_name}}} in rewrite {template!r}")

        def _rewrite(file: str) -> str:
            return template.format(file=file)

        return cls(pattern=compiled, rewrite=_rewrite)

    def matches(self, path: str) -> bool:
        return self.pattern.search(path) is not None


@dataclass(frozen=True)
class Var:
    """A documented public member of a namespace."""

    name: str
    type: str = "var"
    arglists: Tuple[Tuple[str, ...], ...] = ()
    doc: Optional[str] = None
    doc_format: Optional[str] = None
    added: Optional[str] = None
    deprecated: Union[bool, str, None] = None
    file: str = ""
    line: Optional[int] = None
    path: str = ""
    members: Tuple["Var", ...] = ()


@dataclass(frozen=True)
class Namespace:
    """A documented namespace and its public vars."""

    name: str
    doc: Optional[str] = None
    doc_format: Optional[str] = None
    publics: Tuple[Var, ...] = ()

    def __post_init__(self) -> None:
        validate_namespace_name(self.name)


@dataclass(frozen=True)
class Project:
    """Read-only snapshot of everything a rendering pass needs."""

    name: str
    version: str = ""
    description: str = ""
    output_dir: str = "doc"
    doc_format: Optional[str] = None
    src_dir_uri: Optional[str] = None
    src_uri_mapping: Tuple[SourceRule, ...] = ()
    src_linenum_anchor_prefix: Optional[str] = None
    namespaces: Tuple[Namespace, ...] = field(default=())

    def __post_init__(self) -> None:
        seen = set()
        for namespace in self.namespaces:
            if namespace.name in seen:
                raise MetadataError(f"Duplicate namespace: {namespace.name}")
            seen.add(namespace.name)

    def namespace(self, name: str) -> Optional[Namespace]:
        for namespace in self.namespaces:
            if namespace.name == name:
                return namespace
        return None
