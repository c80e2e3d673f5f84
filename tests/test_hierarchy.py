"""Tests for nsdoc.hierarchy."""

from __future__ import annotations

import pytest

from nsdoc.hierarchy import build_hierarchy, namespace_hierarchy, namespace_parts
from nsdoc.models import NamespaceNameError
from tests._fixtures.sample_project import sample_namespaces


def _rows(names):
    return [
        (node.name, node.depth, node.height, node.branches, node.linked)
        for node in namespace_hierarchy(names)
    ]


def test_namespace_parts_lists_every_prefix() -> None:
    assert namespace_parts("a.b.c") == ["a", "a.b", "a.b.c"]
    assert namespace_parts("solo") == ["solo"]


def test_siblings_synthesize_unlinked_parent() -> None:
    assert _rows(["a.c", "a.b"]) == [
        ("a", 1, 2, False, False),
        ("a.b", 2, 0, True, True),
        ("a.c", 2, 0, False, True),
    ]


def test_heights_count_contiguous_descendants() -> None:
    nodes = {node.name: node for node in namespace_hierarchy(["x.y.z", "x", "x.y"])}
    assert nodes["x"].height == 2
    assert nodes["x.y"].height == 1
    assert nodes["x.y.z"].height == 0
    assert all(node.linked for node in nodes.values())


def test_top_level_names_have_depth_one_and_no_height() -> None:
    rows = _rows(["beta", "alpha", "gamma"])
    assert [row[0] for row in rows] == ["alpha", "beta", "gamma"]
    assert all(depth == 1 and height == 0 for _, depth, height, _, _ in rows)
    assert [row[3] for row in rows] == [True, True, False]


def test_every_prefix_appears_exactly_once_and_is_stable() -> None:
    names = ["a.b.c", "a.b.d", "a.e", "f.g", "a.b"]
    first = namespace_hierarchy(names)
    second = namespace_hierarchy(list(reversed(names)))
    assert first == second

    expected = {"a", "a.b", "a.b.c", "a.b.d", "a.e", "f", "f.g"}
    produced = [node.name for node in first]
    assert sorted(produced) == sorted(expected)
    assert len(produced) == len(set(produced))


def test_branches_follow_next_node_depth() -> None:
    nodes = namespace_hierarchy(["a.b.c", "a.d"])
    flags = {node.name: node.branches for node in nodes}
    # "a.b" is followed by its own child, so its line stops even though "a.d" follows later.
    assert flags == {"a": False, "a.b": False, "a.b.c": False, "a.d": False}
    heights = {node.name: node.height for node in nodes}
    assert heights == {"a": 3, "a.b": 1, "a.b.c": 0, "a.d": 0}


def test_nodes_sort_by_full_dotted_string() -> None:
    # "-" sorts before ".", so "a-b" comes between "a" and "a.c".
    assert _rows(["a.c", "a-b"]) == [
        ("a", 1, 0, True, False),
        ("a-b", 1, 1, False, True),
        ("a.c", 2, 0, False, True),
    ]


def test_empty_input_yields_no_nodes() -> None:
    assert namespace_hierarchy([]) == []


@pytest.mark.parametrize("name", ["", "a..b", ".a", "a."])
def test_malformed_names_are_rejected(name: str) -> None:
    with pytest.raises(NamespaceNameError):
        namespace_hierarchy([name])


def test_build_hierarchy_marks_placeholders() -> None:
    nodes = build_hierarchy(sample_namespaces())
    assert [(node.name, node.linked) for node in nodes] == [
        ("example", False),
        ("example.core", True),
        ("example.util", False),
        ("example.util.strings", True),
    ]
    assert [node.short_name for node in nodes] == ["example", "core", "util", "strings"]
