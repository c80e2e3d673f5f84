"""Plain-text docstrings with clickable bare URLs."""

from __future__ import annotations

import re

from markupsafe import Markup, escape

from .base import DocFormatter

_URL_PATTERN = re.compile(
    r"(?:https?|ftp|file)://[-A-Za-z0-9+&@#/%?=~_|!:,.;]+[-A-Za-z0-9+&@#/%=~_|]"
)
_ANCHOR = Markup('<a href="{0}">{0}</a>')


def add_anchors(text: str) -> Markup:
    """Escape ``text`` and wrap every URL in an anchor pointing at itself."""
    parts: list[Markup] = []
    position = 0
    for match in _URL_PATTERN.finditer(text):
        parts.append(escape(text[position : match.start()]))
        parts.append(_ANCHOR.format(match.group(0)))
        position = match.end()
    parts.append(escape(text[position:]))
    return Markup("").join(parts)


class PlainTextFormatter(DocFormatter):
    """Renders docstrings verbatim inside ``<pre>``."""

    def render(self, doc: str | None) -> Markup:
        if doc is None:
            return Markup("")
        return Markup("<pre>{}</pre>").format(add_anchors(doc))


__all__ = ["PlainTextFormatter", "add_anchors"]
