"""Short-form docstrings for the index page."""

from __future__ import annotations

import re

_SUMMARY_END = re.compile(r"\f|\n[ \t]*\n")


def summary(doc: str | None) -> str | None:
    """Return the first paragraph of ``doc``.

    The summary runs from the start of the stripped text to the first form
    feed or blank line. Docs without either are returned whole (stripped).
    """
    if doc is None:
        return None
    text = doc.strip()
    match = _SUMMARY_END.search(text)
    if match is None:
        return text
    return text[: match.start()].rstrip()


__all__ = ["summary"]
