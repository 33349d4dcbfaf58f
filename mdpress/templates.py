"""Template rendering engine for mdpress.

This module uses Jinja2 to merge rendered page fragments into the single
shared page template. The template is read and compiled once per build.

Template variables:
- content: Rendered Markdown HTML (use ``{{ content | safe }}``).
- title: Page title, escaped by the engine.
- description: Page description, escaped by the engine.
- css: Stylesheet text, only present when a stylesheet is configured
  (use ``{{ css | safe }}``).

Missing variables render as empty and are falsy in conditionals.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from typing import Any

from jinja2 import Environment, Template, TemplateSyntaxError

from .errors import BuildError

__all__ = ["TemplateEngine", "TemplateLoadError", "TemplateRenderError"]


class TemplateLoadError(BuildError):
    """The page template could not be read or compiled."""


class TemplateRenderError(Exception):
    """Rendering the page template failed for one document.

    Attributes:
        message: Human-readable error message.
        original_error: The exception that was caught.
    """

    def __init__(self, message: str, original_error: Exception | None = None):
        self.message = message
        self.original_error = original_error
        super().__init__(message)


class TemplateEngine:
    """Template rendering engine using Jinja2.

    Attributes:
        env: Jinja2 environment with autoescaping enabled.
        template: The compiled page template.
    """

    def __init__(self, source: str, name: str = "page"):
        """Compile the page template.

        Args:
            source: Template text.
            name: Template name, used in diagnostics.

        Raises:
            TemplateSyntaxError: If the template does not compile.
        """
        self.env = Environment(autoescape=True, keep_trailing_newline=True)
        self.name = name
        self.template: Template = self.env.from_string(source)

    @classmethod
    def from_file(cls, path: Path) -> TemplateEngine:
        """Load and compile a template file.

        Args:
            path: Path to the template file.

        Returns:
            A ready TemplateEngine.

        Raises:
            TemplateLoadError: If the file cannot be read or compiled.
        """
        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise TemplateLoadError(
                path, f"Failed to read template file: {exc}", exc
            ) from exc
        try:
            return cls(source, name=path.name)
        except TemplateSyntaxError as exc:
            raise TemplateLoadError(
                path,
                f"Template syntax error on line {exc.lineno}: {exc.message}",
                exc,
            ) from exc

    def render(self, context: Mapping[str, Any]) -> str:
        """Render the page template.

        Args:
            context: Variables to make available in the template.

        Returns:
            Rendered HTML string.

        Raises:
            TemplateRenderError: If rendering raises, whether from Jinja2 itself
                or from a Python error inside a template expression.
        """
        try:
            return self.template.render(**context)
        except Exception as exc:
            # Expressions can raise plain Python errors (TypeError, ZeroDivisionError).
            raise TemplateRenderError(_format_error_message(exc), exc) from exc


def _format_error_message(exc: Exception) -> str:
    """Format a rendering exception into a user-friendly error message."""
    error_type = type(exc).__name__
    error_msg = str(exc)
    if error_type == "UndefinedError":
        return f"Undefined variable: {error_msg}"
    return f"{error_type}: {error_msg}"
