"""Markdown docstrings rendered with Python-Markdown."""

from __future__ import annotations

from typing import Sequence

import markdown
from markupsafe import Markup

from .base import DocFormatter

DEFAULT_EXTENSIONS: tuple[str, ...] = ("extra",)


class MarkdownFormatter(DocFormatter):
    """Converts docstrings with the ``extra`` extension set unless told otherwise."""

    def __init__(self, extensions: Sequence[str] | None = None) -> None:
        self.extensions = list(extensions if extensions is not None else DEFAULT_EXTENSIONS)

    def render(self, doc: str | None) -> Markup | None:
        if doc is None:
            return None
        return Markup(markdown.markdown(doc, extensions=self.extensions))


__all__ = ["DEFAULT_EXTENSIONS", "MarkdownFormatter"]
