"""Protocol definitions for mdpress.

The build pipeline depends on these small interfaces rather than on mistune
or Jinja2 directly, so either renderer can be swapped (or faked in tests)
without touching the generator.
"""

from __future__ import annotations

from abc import abstractmethod
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .content import Document


@runtime_checkable
class ContentRenderer(Protocol):
    """Protocol for rendering a document body to HTML."""

    @abstractmethod
    def render(self, content: str) -> str:
        """Render content to an HTML fragment.

        Args:
            content: Source text with front matter removed.

        Returns:
            Rendered HTML.
        """
        ...


@runtime_checkable
class TemplateRenderer(Protocol):
    """Protocol for merging a render context into the page template."""

    @abstractmethod
    def render(self, context: Mapping[str, Any]) -> str:
        """Render the page template.

        Args:
            context: Template variables for one document.

        Returns:
            Final HTML string.

        Raises:
            TemplateRenderError: If rendering fails.
        """
        ...


@runtime_checkable
class ContentLoader(Protocol):
    """Protocol for discovering source documents."""

    @abstractmethod
    def iter_files(self) -> list[Path]:
        """Return all source documents to process."""
        ...

    @abstractmethod
    def document_for(self, path: Path, output_dir: Path) -> Document:
        """Map a discovered file to a Document with its output path.

        Raises:
            ValueError: If ``path`` is not inside the source directory.
        """
        ...
