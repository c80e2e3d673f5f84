"""Render API metadata into linked HTML documentation pages."""

from .formatting import DocFormatRegistry, DocFormatter, UnknownDocFormatError, format_doc
from .hierarchy import HierarchyNode, build_hierarchy, namespace_hierarchy
from .identifiers import ns_filename, var_id, var_uri
from .models import MetadataError, Namespace, NamespaceNameError, Project, SourceRule, Var
from .pages import PageAssembler
from .source import source_uri

__version__ = "0.1.0"

__all__ = [
    "DocFormatRegistry",
    "DocFormatter",
    "HierarchyNode",
    "MetadataError",
    "Namespace",
    "NamespaceNameError",
    "PageAssembler",
    "Project",
    "SourceRule",
    "UnknownDocFormatError",
    "Var",
    "build_hierarchy",
    "format_doc",
    "namespace_hierarchy",
    "ns_filename",
    "source_uri",
    "var_id",
    "var_uri",
]
