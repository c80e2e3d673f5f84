"""Builders for small, fully-populated projects used across the test suite."""

from __future__ import annotations

from typing import Any, Dict

from nsdoc.models import Namespace, Project, SourceRule, Var


def sample_namespaces() -> tuple[Namespace, ...]:
    """Two namespaces whose ancestors ("example", "example.util") are placeholders."""
    members = (
        Var(name="first-member", type="function", arglists=(("this",),), doc="First member."),
        Var(name="second-member", type="function", arglists=(("this", "n"),), doc="Second member."),
    )
    core = Namespace(
        name="example.core",
        doc="Core functions for the example library.\n\nLonger discussion that the index omits.",
        publics=(
            Var(
                name="Zeta",
                type="function",
                arglists=(("x",), ("x", "y")),
                doc="Adds x & y. See http://example.com/zeta for details.",
                file="example/core.clj",
                line=12,
                path="src/example/core.clj",
            ),
            Var(
                name="alpha",
                doc="A plain var.",
                file="example/core.clj",
                line=3,
                path="src/example/core.clj",
            ),
            Var(
                name="Beta",
                type="protocol",
                doc="A protocol with members.",
                added="1.0",
                deprecated="1.2",
                file="example/core.clj",
                line=20,
                path="src/example/core.clj",
                members=members,
            ),
        ),
    )
    strings = Namespace(
        name="example.util.strings",
        doc="String helpers.",
        publics=(
            Var(
                name="blank?",
                type="function",
                arglists=(("s",),),
                doc=None,
                deprecated=True,
                file="example/util/strings.clj",
                line=7,
                path="resources/example/util/strings.clj",
            ),
        ),
    )
    return (core, strings)


def sample_project(**overrides: Any) -> Project:
    """Return a project with source linking configured; ``overrides`` replace fields."""
    fields: Dict[str, Any] = {
        "name": "example",
        "version": "1.3.0",
        "description": "An example library for <testing>.",
        "src_dir_uri": "https://example.com/repo/blob/main/",
        "src_uri_mapping": (SourceRule.from_template(r"^src", "src/{file}"),),
        "src_linenum_anchor_prefix": "L",
        "namespaces": sample_namespaces(),
    }
    fields.update(overrides)
    return Project(**fields)


SAMPLE_METADATA: Dict[str, Any] = {
    "name": "example",
    "version": "1.3.0",
    "description": "An example library.",
    "namespaces": [
        {
            "name": "example.core",
            "doc": "Core functions.",
            "publics": [
                {
                    "name": "Zeta",
                    "type": "function",
                    "arglists": [["x"], ["x", "y"]],
                    "doc": "Adds things.",
                    "file": "example/core.clj",
                    "line": 12,
                    "path": "src/example/core.clj",
                },
                {
                    "name": "Beta",
                    "type": "protocol",
                    "doc": "Protocol.",
                    "file": "example/core.clj",
                    "line": 20,
                    "path": "src/example/core.clj",
                    "members": [
                        {"name": "first-member", "type": "function", "arglists": [["this"]]},
                    ],
                },
            ],
        },
        {
            "name": "example.util.strings",
            "doc": "String helpers.",
            "doc_format": "markdown",
            "publics": [],
        },
    ],
}


__all__ = ["SAMPLE_METADATA", "sample_namespaces", "sample_project"]
