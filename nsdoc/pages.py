"""Assembles the index page and per-namespace pages from project metadata."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from .formatting import DocFormatRegistry, default_registry, format_doc, summary
from .hierarchy import HierarchyNode, build_hierarchy
from .identifiers import INDEX_FILENAME, ns_filename, var_id, var_uri
from .logging import get_logger
from .models import Namespace, Project, Var
from .source import source_uri

DEFAULT_VAR_TYPE = "var"

# Sidebar rows are 31px tall at the default 15px text size; a connector
# spanning ``height`` rows below its node needs 30px plus one row per node.
ROW_HEIGHT = 31
CONNECTOR_BASE = 30


@dataclass
class VarView:
    """Template-ready rendering of a single var."""

    id: str
    uri: str
    name: str
    type_label: Optional[str]
    added: Optional[str]
    deprecated: Optional[str]
    usages: List[str]
    doc: Optional[Markup]
    members: List["VarView"] = field(default_factory=list)
    source_uri: Optional[str] = None


@dataclass
class SidebarEntry:
    """One ``<li>`` of the namespace tree."""

    label: str
    css_class: str
    href: Optional[str]
    connector: int


def project_title(project: Project) -> str:
    title = project.name.capitalize()
    if project.version:
        title = f"{title} {project.version}"
    return title


def sorted_public_vars(namespace: Namespace) -> List[Var]:
    """Public vars ordered case-insensitively by name."""
    return sorted(namespace.publics, key=lambda var: var.name.lower())


def var_usage(var: Var) -> List[str]:
    """One ``(name arg ...)`` form per arglist."""
    return ["(" + " ".join([var.name, *arglist]) + ")" for arglist in var.arglists]


def deprecation_label(var: Var) -> Optional[str]:
    if var.deprecated is None or var.deprecated is False:
        return None
    if isinstance(var.deprecated, str) and var.deprecated:
        return f"deprecated in {var.deprecated}"
    return "deprecated"


def connector_height(height: int) -> int:
    """Pixel length of the vertical tree line for a node of ``height``."""
    if height <= 0:
        return 0
    return CONNECTOR_BASE + height * ROW_HEIGHT


class PageAssembler:
    """Renders every page of a project against one shared hierarchy."""

    def __init__(
        self,
        project: Project,
        registry: DocFormatRegistry | None = None,
        *,
        hierarchy: Sequence[HierarchyNode] | None = None,
        templates_dir: Path | None = None,
    ) -> None:
        self.project = project
        self.registry = registry if registry is not None else default_registry()
        self.hierarchy: List[HierarchyNode] = (
            list(hierarchy) if hierarchy is not None else build_hierarchy(project.namespaces)
        )
        self.templates_dir = templates_dir
        self._env = self._create_env(templates_dir)
        self._namespaces = {namespace.name: namespace for namespace in project.namespaces}
        self.logger = get_logger("pages")

    def render_pages(self) -> Dict[str, str]:
        """Return every page keyed by its output filename."""
        pages: Dict[str, str] = {INDEX_FILENAME: self.index_page()}
        for namespace in sorted(self.project.namespaces, key=lambda ns: ns.name):
            pages[ns_filename(namespace)] = self.namespace_page(namespace)
        return pages

    def index_page(self) -> str:
        blocks = []
        for namespace in sorted(self.project.namespaces, key=lambda ns: ns.name):
            short = dataclasses.replace(namespace, doc=summary(namespace.doc))
            blocks.append(
                {
                    "name": namespace.name,
                    "href": ns_filename(namespace),
                    "doc": self._format(short),
                    "vars": [
                        {"name": var.name, "uri": var_uri(namespace, var)}
                        for var in sorted_public_vars(namespace)
                    ],
                }
            )
        self.logger.debug("Rendering index with %d namespaces", len(blocks))
        return self._render(
            "index.html.j2",
            sidebar=self.sidebar(),
            description=self.project.description,
            namespaces=blocks,
        )

    def namespace_page(self, namespace: Namespace) -> str:
        views = [self.var_view(namespace, var) for var in sorted_public_vars(namespace)]
        self.logger.debug("Rendering %s with %d public vars", namespace.name, len(views))
        return self._render(
            "namespace.html.j2",
            sidebar=self.sidebar(current=namespace),
            vars_menu=self.vars_menu(namespace, views),
            namespace={"name": namespace.name, "doc": self._format(namespace)},
            public_vars=views,
        )

    def sidebar(self, current: Namespace | None = None) -> Markup:
        """Render the namespace tree, marking ``current`` when given."""
        current_name = current.name if current is not None else None
        entries: List[SidebarEntry] = []
        for node in self.hierarchy:
            classes = [f"depth-{node.depth}"]
            if node.branches:
                classes.append("branch")
            namespace = self._namespaces.get(node.name) if node.linked else None
            href = None
            if namespace is not None:
                href = ns_filename(namespace)
                if node.name == current_name:
                    classes.append("current")
            entries.append(
                SidebarEntry(
                    label=node.short_name,
                    css_class=" ".join(classes),
                    href=href,
                    connector=connector_height(node.height),
                )
            )
        return Markup(self._render("_namespaces_menu.html.j2", entries=entries))

    def vars_menu(self, namespace: Namespace, views: Iterable[VarView] | None = None) -> Markup:
        if views is None:
            views = [self.var_view(namespace, var) for var in sorted_public_vars(namespace)]
        return Markup(self._render("_vars_menu.html.j2", public_vars=list(views)))

    def var_view(self, namespace: Namespace, var: Var, *, show_source: bool = True) -> VarView:
        """Build the detail view of ``var``; members never link to source."""
        members = [
            self.var_view(namespace, member, show_source=False) for member in var.members
        ]
        link = None
        if show_source and self.project.src_dir_uri:
            link = source_uri(self.project, var)
        return VarView(
            id=var_id(var),
            uri=var_uri(namespace, var),
            name=var.name,
            type_label=None if var.type == DEFAULT_VAR_TYPE else var.type,
            added=var.added or None,
            deprecated=deprecation_label(var),
            usages=var_usage(var),
            doc=self._format(var),
            members=members,
            source_uri=link,
        )

    def _format(self, metadata: Namespace | Var) -> Optional[Markup]:
        return format_doc(self.project, metadata, self.registry)

    def _render(self, template_name: str, **context: object) -> str:
        template = self._env.get_template(template_name)
        return template.render(
            project=self.project,
            title=project_title(self.project),
            index_href=INDEX_FILENAME,
            **context,
        )

    @staticmethod
    def _create_env(templates_dir: Path | None) -> Environment:
        directories: List[str] = []
        if templates_dir:
            directories.append(str(templates_dir))
        default_dir = str(Path(__file__).with_name("templates"))
        if default_dir not in directories:
            directories.append(default_dir)
        return Environment(
            loader=FileSystemLoader(directories),
            autoescape=select_autoescape(enabled_extensions=("html.j2",)),
            trim_blocks=True,
            lstrip_blocks=True,
        )


__all__ = [
    "PageAssembler",
    "SidebarEntry",
    "VarView",
    "connector_height",
    "deprecation_label",
    "project_title",
    "sorted_public_vars",
    "var_usage",
]
