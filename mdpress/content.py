"""Content discovery for mdpress.

This module finds Markdown documents under the source directory, derives
where each one is written, and builds the variables passed to the page
template.

Key objects:
- Document: A source file and its position in the source tree.
- FileContentLoader: Implementation of the ContentLoader protocol.
- output_path_for: Map a relative source path to its HTML output path.
- build_render_context: Assemble template variables for one document.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .extractors import DEFAULT_TITLE, PageMetadata
from .utils import replace_suffix

MARKDOWN_SUFFIX = ".md"
HTML_SUFFIX = ".html"


@dataclass
class Document:
    """A Markdown source file scheduled for rendering.

    Attributes:
        source_path: Path to the file on disk.
        relative_path: Path relative to the source directory.
        output_path: Path of the HTML file this document produces.
    """

    source_path: Path
    relative_path: Path
    output_path: Path

    def read_text(self) -> str:
        """Read the raw document text as UTF-8, keeping line endings as-is."""
        with open(self.source_path, encoding="utf-8", newline="") as f:
            return f.read()


def output_path_for(output_dir: Path, relative_path: Path) -> Path:
    """Derive the output path for a document.

    Args:
        output_dir: Root of the generated site.
        relative_path: Document path relative to the source directory.

    Returns:
        ``output_dir / relative_path`` with the extension replaced by ``.html``.
    """
    return output_dir / replace_suffix(relative_path, HTML_SUFFIX)


class FileContentLoader:
    """Loads Markdown files from a directory.

    Only regular files whose suffix is exactly ``.md`` are returned;
    the comparison is case-sensitive.

    Attributes:
        source_dir: Directory containing the Markdown sources.
    """

    def __init__(self, source_dir: Path):
        """Initialize the content loader.

        Args:
            source_dir: Path to the source directory.
        """
        self.source_dir = source_dir

    def iter_files(self) -> list[Path]:
        """Return all Markdown files under the source directory.

        Returns:
            Sorted list of paths to Markdown files.
        """
        files: list[Path] = []
        for path in self.source_dir.rglob(f"*{MARKDOWN_SUFFIX}"):
            if path.suffix != MARKDOWN_SUFFIX or not path.is_file():
                continue
            files.append(path)
        return sorted(files)

    def document_for(self, path: Path, output_dir: Path) -> Document:
        """Build a Document for a discovered file.

        Args:
            path: Path returned by iter_files.
            output_dir: Root of the generated site.

        Returns:
            Document with relative and output paths filled in.

        Raises:
            ValueError: If ``path`` is not inside the source directory.
        """
        rel = path.relative_to(self.source_dir)
        return Document(
            source_path=path,
            relative_path=rel,
            output_path=output_path_for(output_dir, rel),
        )


def build_render_context(
    content: str, metadata: PageMetadata | None, css: str | None = None
) -> dict[str, str]:
    """Assemble the template variables for one document.

    Args:
        content: Rendered Markdown HTML.
        metadata: Parsed front matter, or None.
        css: Stylesheet text, or None when no stylesheet is configured.

    Returns:
        Mapping with ``content``, ``title``, ``description`` and, when a
        stylesheet is configured, ``css``.
    """
    context = {
        "content": content,
        "title": metadata.display_title if metadata else DEFAULT_TITLE,
        "description": metadata.description if metadata else "",
    }
    if css is not None:
        context["css"] = css
    return context
