"""Utility functions for mdpress.

This module contains small helpers shared by the configuration loader,
the front-matter splitter and the site generator.

Key functions:
    load_yaml: Parse YAML text, rejecting duplicate mapping keys.
    replace_suffix: Swap the extension of a relative path.
    atomic_write_text: Write a text file without leaving partial output behind.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Any

import yaml
from yaml.constructor import ConstructorError

_MERGE_TAG = "tag:yaml.org,2002:merge"


class UniqueKeyLoader(yaml.SafeLoader):
    """Safe YAML loader that refuses mappings with repeated keys.

    PyYAML keeps the last value when a key is repeated. Front matter and
    configuration treat that as an error instead, so a document with two
    ``title:`` lines fails rather than silently picking one.
    """

    def construct_mapping(self, node, deep=False):
        if isinstance(node, yaml.MappingNode):
            seen: set[Any] = set()
            for key_node, _ in node.value:
                if key_node.tag == _MERGE_TAG:
                    continue
                key = self.construct_object(key_node, deep=deep)
                try:
                    duplicate = key in seen
                except TypeError:
                    # Unhashable keys are reported by the base constructor.
                    continue
                if duplicate:
                    raise ConstructorError(
                        "while constructing a mapping",
                        node.start_mark,
                        f"found duplicate key {key!r}",
                        key_node.start_mark,
                    )
                seen.add(key)
        return super().construct_mapping(node, deep=deep)


def load_yaml(text: str) -> Any:
    """Parse a YAML document with duplicate-key rejection.

    Args:
        text: YAML source.

    Returns:
        The parsed value (``None`` for an empty document).

    Raises:
        yaml.YAMLError: On syntax errors or duplicate keys.
    """
    return yaml.load(text, Loader=UniqueKeyLoader)  # noqa: S506 - SafeLoader subclass


def replace_suffix(rel: Path, suffix: str) -> Path:
    """Replace the final extension of a relative path.

    Args:
        rel: Path relative to the source directory.
        suffix: New suffix including the dot, e.g. ``".html"``.

    Returns:
        Path with the same parent directories and the new suffix.

    Examples:
        >>> replace_suffix(Path("guides/intro.md"), ".html")
        PosixPath('guides/intro.html')
    """
    return rel.with_suffix(suffix)


def atomic_write_text(path: Path, text: str) -> None:
    """Write text to a file atomically using a temporary file.

    The temporary file lives next to the destination so the final
    ``os.replace`` never crosses a filesystem boundary. An existing file at
    ``path`` is overwritten; on failure it is left untouched.

    Args:
        path: Destination file path. Its parent directory must exist.
        text: Text content to write (UTF-8).

    Raises:
        OSError: If the temporary file cannot be written or moved into place.
    """
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            tmp.write(text)
        # mkstemp creates 0600 files; published pages must be world-readable.
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, path)
    finally:
        if os.path.exists(tmp_name):
            os.remove(tmp_name)
