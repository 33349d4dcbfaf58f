"""Markdown rendering for mdpress.

This module contains the ContentRenderer implementation used for Markdown
documents. It wraps mistune and exposes a narrow ``render(body) -> html``
contract; the rest of the pipeline never touches mistune directly.

Key objects:
- MARKDOWN_EXTENSIONS: Optional mistune plugins that may be enabled.
- MarkdownRenderer: Renders Markdown text to an HTML fragment.
- render_markdown: Convenience function for one-off rendering.
"""

from __future__ import annotations

from collections.abc import Iterable

import mistune

# Plugins shipped with mistune that only add syntax. All are off by default.
MARKDOWN_EXTENSIONS = frozenset(
    {
        "strikethrough",
        "table",
        "footnotes",
        "url",
        "task_lists",
        "def_list",
        "abbr",
        "mark",
        "insert",
        "superscript",
        "subscript",
    }
)


class UnknownExtensionError(ValueError):
    """Raised when an unsupported Markdown extension is requested."""


class MarkdownRenderer:
    """Renders Markdown content to HTML.

    Raw HTML in the source is passed through unchanged, and no link or
    image paths are rewritten.

    Attributes:
        extensions: Names of the enabled mistune plugins.
    """

    def __init__(self, extensions: Iterable[str] = ()):
        """Initialize the renderer.

        Args:
            extensions: Optional mistune plugin names (see MARKDOWN_EXTENSIONS).

        Raises:
            UnknownExtensionError: If an extension name is not supported.
        """
        self.extensions = tuple(extensions)
        unknown = sorted(set(self.extensions) - MARKDOWN_EXTENSIONS)
        if unknown:
            raise UnknownExtensionError(
                f"Unknown Markdown extension(s): {', '.join(unknown)}"
            )
        self._markdown = mistune.create_markdown(
            escape=False, plugins=list(self.extensions)
        )

    def render(self, content: str) -> str:
        """Render Markdown content to HTML.

        Args:
            content: Markdown source content (front matter already removed).

        Returns:
            Rendered HTML fragment.
        """
        return self._markdown(content)


def render_markdown(body: str, extensions: Iterable[str] = ()) -> str:
    """Render a Markdown body to an HTML fragment.

    Args:
        body: Markdown text.
        extensions: Optional mistune plugin names.

    Returns:
        HTML fragment string.
    """
    return MarkdownRenderer(extensions).render(body)
