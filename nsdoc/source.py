"""Links from rendered vars to an external source browser."""

from __future__ import annotations

from typing import Iterable, Optional

from .models import Project, SourceRule, Var


def match_rule(rules: Iterable[SourceRule], path: str) -> Optional[SourceRule]:
    """Return the first rule whose pattern matches ``path``."""
    for rule in rules:
        if rule.matches(path):
            return rule
    return None


def source_uri(project: Project, var: Var) -> str:
    """Build the "view source" URL for ``var``.

    ``src_dir_uri`` is followed by the first matching rule's rewrite of the
    var's file (or the raw path when no rule matches), then by
    ``#<prefix><line>`` when a line anchor prefix is configured.
    """
    path = str(var.path or "")
    rule = match_rule(project.src_uri_mapping, path)
    location = rule.rewrite(var.file) if rule is not None else path
    uri = f"{project.src_dir_uri or ''}{location}"
    if project.src_linenum_anchor_prefix:
        line = var.line if var.line is not None else ""
        uri += f"#{project.src_linenum_anchor_prefix}{line}"
    return uri


__all__ = ["match_rule", "source_uri"]
