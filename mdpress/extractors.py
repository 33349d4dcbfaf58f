"""Front-matter extraction for mdpress.

This module separates an optional YAML metadata block from the Markdown body
of a single document and parses it into a PageMetadata instance.

A block starts when the text begins with a ``---`` line and ends at the next
line containing exactly ``---``. Without a closing line the whole text is
treated as Markdown. A block that is present but malformed (bad YAML,
duplicate keys, wrong shape) raises MetadataParseError and the document is
not processed further.

Key objects:
- PageMetadata: Typed shape of the metadata block.
- MetadataParseError: Raised when a block cannot be parsed.
- extract_frontmatter: Split raw text into (metadata, body).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import yaml

from .utils import load_yaml

DELIMITER = "---"
DEFAULT_TITLE = "Untitled"


class MetadataParseError(Exception):
    """Front matter was present but could not be parsed.

    Attributes:
        message: Human-readable error message.
        original_error: The underlying exception, if any.
    """

    def __init__(self, message: str, original_error: Exception | None = None):
        self.message = message
        self.original_error = original_error
        super().__init__(message)


@dataclass(frozen=True)
class PageMetadata:
    """Metadata parsed from a document's front matter.

    Attributes:
        title: Page title, or None when the block has no ``title`` key.
        description: Short description, empty when not given.
    """

    title: str | None = None
    description: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> PageMetadata:
        """Build metadata from a parsed YAML mapping.

        Unknown keys are ignored. ``title`` and ``description`` must be
        strings when present; YAML booleans, numbers and dates are rejected
        rather than converted.

        Raises:
            MetadataParseError: If ``title`` or ``description`` is not a string.
        """
        title = _string_field(data, "title")
        description = _string_field(data, "description")
        return cls(title=title, description=description or "")

    @property
    def display_title(self) -> str:
        """Title to render, falling back to the placeholder."""
        return self.title or DEFAULT_TITLE


def _string_field(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is None or isinstance(value, str):
        return value
    raise MetadataParseError(
        f"Field '{key}' must be a string, got {type(value).__name__}"
    )


def _split_block(text: str) -> tuple[str, str] | None:
    """Locate the front-matter block.

    Returns:
        Tuple of (block text, body) or None when there is no complete block.
    """
    # Only "\n" ends a line; str.splitlines would also break on \x0c, \u2028 etc.
    lines = text.split("\n")
    if len(lines) < 2 or not _is_delimiter(lines[0]):
        return None
    for index in range(1, len(lines)):
        if _is_delimiter(lines[index]):
            block = "".join(f"{line}\n" for line in lines[1:index])
            body = "\n".join(lines[index + 1 :])
            return block, body
    return None


def _is_delimiter(line: str) -> bool:
    return line in (DELIMITER, f"{DELIMITER}\r")


def extract_frontmatter(text: str) -> tuple[PageMetadata | None, str]:
    """Extract YAML front matter from document text.

    Args:
        text: Raw file content.

    Returns:
        Tuple of (metadata or None, Markdown body). The body is the text
        strictly after the closing delimiter line, or the whole text when
        no complete block is present.

    Raises:
        MetadataParseError: If the block is not valid YAML, repeats a key,
            or is not a mapping.
    """
    split = _split_block(text)
    if split is None:
        return None, text
    block, body = split
    try:
        data = load_yaml(block)
    except yaml.YAMLError as exc:
        raise MetadataParseError(f"Failed to parse YAML front matter: {exc}", exc) from exc
    if data is None:
        return PageMetadata(), body
    if not isinstance(data, dict):
        raise MetadataParseError(
            f"Front matter must be a mapping, got {type(data).__name__}"
        )
    return PageMetadata.from_mapping(data), body

