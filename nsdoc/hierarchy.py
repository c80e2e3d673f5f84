"""Sidebar tree geometry for dotted namespace names.

The tree is computed from names alone so it can be tested without any HTML.
Each node carries:

* ``depth``: number of dotted segments (``a.b`` is 2);
* ``height``: how many following nodes are deeper than this one before a
  sibling or ancestor is reached, i.e. the rows its connector spans;
* ``branches``: whether the next node sits at the same depth, so the tree
  line continues downward;
* ``linked``: whether a real namespace has this name, as opposed to an
  ancestor synthesized to keep the tree connected.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence

from .models import Namespace, split_namespace, validate_namespace_name


@dataclass(frozen=True)
class HierarchyNode:
    """One row of the namespace sidebar."""

    name: str
    depth: int
    height: int
    branches: bool
    linked: bool

    @property
    def short_name(self) -> str:
        return split_namespace(self.name)[-1]


def namespace_parts(name: str) -> List[str]:
    """Return every dotted prefix of ``name``, shortest first."""
    segments = split_namespace(validate_namespace_name(name))
    return [".".join(segments[: index + 1]) for index in range(len(segments))]


def _heights(depths: Sequence[int]) -> List[int]:
    heights: List[int] = []
    for index, depth in enumerate(depths):
        height = 0
        for following in depths[index + 1 :]:
            if following <= depth:
                break
            height += 1
        heights.append(height)
    return heights


def namespace_hierarchy(names: Iterable[str]) -> List[HierarchyNode]:
    """Annotate the sorted, ancestor-complete set of ``names`` for the sidebar."""
    real = set(names)
    parts = {part for name in real for part in namespace_parts(name)}
    ordered = sorted(parts)

    depths = [len(split_namespace(name)) for name in ordered]
    heights = _heights(depths)

    nodes: List[HierarchyNode] = []
    for index, name in enumerate(ordered):
        next_depth = depths[index + 1] if index + 1 < len(depths) else None
        nodes.append(
            HierarchyNode(
                name=name,
                depth=depths[index],
                height=heights[index],
                branches=next_depth == depths[index],
                linked=name in real,
            )
        )
    return nodes


def build_hierarchy(namespaces: Iterable[Namespace]) -> List[HierarchyNode]:
    return namespace_hierarchy(namespace.name for namespace in namespaces)


__all__ = ["HierarchyNode", "build_hierarchy", "namespace_hierarchy", "namespace_parts"]
