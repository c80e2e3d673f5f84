"""Base class for doc-format plugins."""

from abc import ABC, abstractmethod
from typing import Optional

from markupsafe import Markup


class DocFormatter(ABC):
    """Contract for turning a raw docstring into an HTML fragment."""

    @abstractmethod
    def render(self, doc: Optional[str]) -> Optional[Markup]:
        """Return safe HTML for ``doc``, or None when there is nothing to show."""
