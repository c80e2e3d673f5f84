"""Deterministic file names, anchors and links for rendered pages."""

from __future__ import annotations

from urllib.parse import quote_plus

from .models import Namespace, Var

INDEX_FILENAME = "index.html"
VAR_ID_PREFIX = "var-"


def var_id(var: Var) -> str:
    """Return the HTML id for ``var``; safe as an attribute and a URL fragment.

    The name is form-encoded and every ``%`` escape marker becomes ``.`` so
    ``foo?`` maps to ``var-foo.3F``.
    """
    encoded = quote_plus(str(var.name), safe="*")
    return VAR_ID_PREFIX + encoded.replace("%", ".")


def ns_filename(namespace: Namespace) -> str:
    return f"{namespace.name}.html"


def var_uri(namespace: Namespace, var: Var) -> str:
    """Link to ``var``'s detail block on its namespace page."""
    return f"{ns_filename(namespace)}#{var_id(var)}"


__all__ = ["INDEX_FILENAME", "ns_filename", "var_id", "var_uri"]
