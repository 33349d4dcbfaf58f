"""Configuration loading for mdpress.

The configuration lives in a fixed-name YAML file, ``mdpress.yaml``, in the
project root (the current working directory when run from the CLI).

Example::

    source_dir: content
    output_dir: public
    template_file: templates/page.html
    css_file: templates/style.css
    markdown_extensions: [strikethrough, table]

Relative paths are resolved against the project root.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from .errors import BuildError
from .renderers import MARKDOWN_EXTENSIONS
from .utils import load_yaml

CONFIG_FILENAME = "mdpress.yaml"

REQUIRED_KEYS = ("source_dir", "output_dir", "template_file")


class ConfigError(BuildError):
    """The configuration file is missing, unreadable or invalid."""


@dataclass(frozen=True)
class Config:
    """Immutable settings for one build.

    Attributes:
        source_dir: Directory scanned for Markdown documents.
        output_dir: Directory the HTML tree is written to.
        template_file: Jinja2 template shared by every page.
        css_file: Optional stylesheet to inline and copy as ``style.css``.
        markdown_extensions: Optional mistune plugins to enable.
    """

    source_dir: Path
    output_dir: Path
    template_file: Path
    css_file: Path | None = None
    markdown_extensions: tuple[str, ...] = ()

    @classmethod
    def from_mapping(
        cls, data: dict[str, Any], project_root: Path, config_path: Path
    ) -> Config:
        """Validate a parsed configuration mapping.

        Args:
            data: Parsed YAML mapping.
            project_root: Directory relative paths are resolved against.
            config_path: Path of the file, used in error messages.

        Raises:
            ConfigError: If a required key is missing or a value has the wrong type.
        """
        values: dict[str, Path] = {}
        for key in REQUIRED_KEYS:
            raw = data.get(key)
            if raw is None:
                raise ConfigError(config_path, f"Missing required key '{key}'")
            values[key] = project_root / _path_value(raw, key, config_path)

        css_raw = data.get("css_file")
        css_file = (
            project_root / _path_value(css_raw, "css_file", config_path)
            if css_raw is not None
            else None
        )
        extensions = _extensions_value(data.get("markdown_extensions"), config_path)
        return cls(
            source_dir=values["source_dir"],
            output_dir=values["output_dir"],
            template_file=values["template_file"],
            css_file=css_file,
            markdown_extensions=extensions,
        )


def _path_value(raw: Any, key: str, config_path: Path) -> Path:
    if not isinstance(raw, str) or not raw.strip():
        raise ConfigError(config_path, f"'{key}' must be a non-empty string")
    return Path(raw)


def _extensions_value(raw: Any, config_path: Path) -> tuple[str, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list) or not all(isinstance(item, str) for item in raw):
        raise ConfigError(config_path, "'markdown_extensions' must be a list of strings")
    unknown = sorted(set(raw) - MARKDOWN_EXTENSIONS)
    if unknown:
        raise ConfigError(
            config_path,
            f"Unknown Markdown extension(s): {', '.join(unknown)}. "
            f"Supported: {', '.join(sorted(MARKDOWN_EXTENSIONS))}",
        )
    return tuple(raw)


def load_config(project_root: Path) -> Config:
    """Load site configuration from mdpress.yaml.

    Args:
        project_root: Directory containing the configuration file.

    Returns:
        Validated Config instance.

    Raises:
        ConfigError: If the file cannot be read, is not valid YAML, repeats a
            key, or does not describe a valid configuration.
    """
    config_path = project_root / CONFIG_FILENAME
    try:
        text = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(config_path, f"Failed to read config: {exc}", exc) from exc
    try:
        loaded = load_yaml(text)
    except yaml.YAMLError as exc:
        raise ConfigError(config_path, f"Failed to parse config: {exc}", exc) from exc
    if not isinstance(loaded, dict):
        raise ConfigError(config_path, "Config must be a YAML mapping")
    return Config.from_mapping(loaded, project_root, config_path)
