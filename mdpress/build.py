"""Site building functionality for mdpress.

This module contains the core logic for building a static site from a
directory of Markdown documents. It loads the template and stylesheet once,
walks the source tree, renders every document and copies the stylesheet.

Failures are handled at three levels:
- Fatal (BuildError): configuration, template, stylesheet read or output
  root creation. Nothing is rendered.
- Per document: the document is skipped, the failure is reported on stderr
  and recorded in the BuildResult, and the build moves on.
- Best effort: a failed stylesheet copy is reported but does not fail the run.

Key functions:
- build_project: Load mdpress.yaml from a directory and build the site.
- build_site: Build the site described by a Config.
- copy_stylesheet: Copy the configured stylesheet to the output root.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import click

from .config import Config, load_config
from .content import Document, FileContentLoader, build_render_context
from .errors import BuildError
from .extractors import MetadataParseError, extract_frontmatter
from .protocols import ContentLoader, ContentRenderer, TemplateRenderer
from .renderers import MarkdownRenderer
from .templates import TemplateEngine, TemplateRenderError
from .utils import atomic_write_text

__all__ = [
    "BuildError",
    "BuildResult",
    "PagePipeline",
    "PageResult",
    "PageStage",
    "STYLESHEET_NAME",
    "build_project",
    "build_site",
    "copy_stylesheet",
]

STYLESHEET_NAME = "style.css"


class PageStage(Enum):
    """Processing stages of a single document, in order."""

    DISCOVERED = "discovered"
    PATH_MAPPED = "path-mapped"
    SPLIT = "front-matter-split"
    MARKDOWN_RENDERED = "markdown-rendered"
    TEMPLATED = "templated"
    WRITTEN = "written"


@dataclass
class PageResult:
    """Outcome of processing one document.

    Attributes:
        source_path: Path to the Markdown file.
        stage: Last stage reached, or the stage that failed when ``error`` is set.
        output_path: Destination path, once known.
        error: The exception that stopped processing, if any.
    """

    source_path: Path
    stage: PageStage
    output_path: Path | None = None
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.stage is PageStage.WRITTEN

    def describe_error(self) -> str:
        """Return a one-line description of the failure."""
        if self.error is None:
            return ""
        message = getattr(self.error, "message", None) or str(self.error)
        return f"failed at {self.stage.value}: {message}"


@dataclass
class BuildResult:
    """Result of a site build operation.

    Attributes:
        output_dir: Directory where the site was built.
        pages: One PageResult per discovered document.
        stylesheet: Path of the copied stylesheet, when the copy succeeded.
        stylesheet_error: Error raised while copying the stylesheet, if any.
    """

    output_dir: Path
    pages: list[PageResult] = field(default_factory=list)
    stylesheet: Path | None = None
    stylesheet_error: Exception | None = None

    @property
    def written(self) -> list[PageResult]:
        return [page for page in self.pages if page.ok]

    @property
    def failed(self) -> list[PageResult]:
        return [page for page in self.pages if not page.ok]


class PagePipeline:
    """Runs a single document through split, render, template and write.

    Each stage returns normally or raises; process() converts the first
    failure into a PageResult so one bad document never stops the build.

    Attributes:
        loader: Content loader used to map paths.
        output_dir: Root of the generated site.
        markdown: Markdown renderer.
        template: Page template renderer.
        css: Stylesheet text inlined into every page, or None.
    """

    def __init__(
        self,
        loader: ContentLoader,
        output_dir: Path,
        markdown: ContentRenderer,
        template: TemplateRenderer,
        css: str | None = None,
    ):
        self.loader = loader
        self.output_dir = output_dir
        self.markdown = markdown
        self.template = template
        self.css = css

    def process(self, path: Path) -> PageResult:
        """Process one Markdown file.

        Args:
            path: Path to a file found under the source directory.

        Returns:
            PageResult describing how far the document got.
        """
        result = PageResult(source_path=path, stage=PageStage.DISCOVERED)
        click.echo(f"Processing Markdown file: {path}", err=True)

        result.stage = PageStage.PATH_MAPPED
        try:
            document = self.loader.document_for(path, self.output_dir)
        except ValueError as exc:
            return _fail(result, exc, f"Failed to strip prefix for {path}")
        result.output_path = document.output_path

        parent = document.output_path.parent
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            return _fail(result, exc, f"Failed to create directory {parent}")

        result.stage = PageStage.SPLIT
        try:
            metadata, body = extract_frontmatter(document.read_text())
        except (OSError, UnicodeDecodeError, MetadataParseError) as exc:
            return _fail(result, exc, f"Failed to parse {path}")

        result.stage = PageStage.MARKDOWN_RENDERED
        html_content = self.markdown.render(body)

        result.stage = PageStage.TEMPLATED
        context = build_render_context(html_content, metadata, self.css)
        try:
            rendered = self.template.render(context)
        except TemplateRenderError as exc:
            return _fail(result, exc, f"Failed to render template for {path}")

        result.stage = PageStage.WRITTEN
        return self._write(result, document, rendered)

    def _write(self, result: PageResult, document: Document, rendered: str) -> PageResult:
        click.echo(f"Writing output to: {document.output_path}", err=True)
        try:
            atomic_write_text(document.output_path, rendered)
        except OSError as exc:
            return _fail(result, exc, f"Failed to write {document.output_path}")
        return result


def _fail(result: PageResult, exc: Exception, context: str) -> PageResult:
    message = getattr(exc, "message", None) or str(exc)
    click.echo(f"{context}: {message}", err=True)
    result.error = exc
    return result


def _read_stylesheet(css_file: Path) -> str:
    click.echo(f"Reading CSS file: {css_file}", err=True)
    try:
        with open(css_file, encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise BuildError(css_file, f"Failed to read CSS file: {exc}", exc) from exc


def _prepare_output_dir(output_dir: Path) -> None:
    click.echo(f"Creating output directory: {output_dir}", err=True)
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise BuildError(
            output_dir, f"Failed to create output directory: {exc}", exc
        ) from exc


def copy_stylesheet(css_file: Path, output_dir: Path) -> Path:
    """Copy the stylesheet to ``<output_dir>/style.css``.

    Args:
        css_file: Configured stylesheet.
        output_dir: Root of the generated site.

    Returns:
        Path of the copied stylesheet.

    Raises:
        OSError: If the copy fails.
    """
    target = output_dir / STYLESHEET_NAME
    click.echo(f"Copying CSS from {css_file} to {target}", err=True)
    shutil.copyfile(css_file, target)
    return target


def build_site(
    config: Config,
    markdown_renderer: ContentRenderer | None = None,
    template_renderer: TemplateRenderer | None = None,
) -> BuildResult:
    """Build the entire static site.

    Args:
        config: Validated configuration.
        markdown_renderer: Optional renderer replacing the mistune default.
        template_renderer: Optional renderer replacing the configured template.

    Returns:
        BuildResult with one entry per discovered document.

    Raises:
        BuildError: If the template or stylesheet cannot be loaded, or the
            output directory cannot be created.
    """
    template = template_renderer or TemplateEngine.from_file(config.template_file)
    markdown = markdown_renderer or MarkdownRenderer(config.markdown_extensions)
    css = _read_stylesheet(config.css_file) if config.css_file else None
    _prepare_output_dir(config.output_dir)

    if not config.source_dir.is_dir():
        click.echo(f"Source directory not found: {config.source_dir}", err=True)
    loader = FileContentLoader(config.source_dir)
    pipeline = PagePipeline(loader, config.output_dir, markdown, template, css)
    result = BuildResult(output_dir=config.output_dir)
    for path in loader.iter_files():
        result.pages.append(pipeline.process(path))

    if config.css_file:
        try:
            result.stylesheet = copy_stylesheet(config.css_file, config.output_dir)
        except OSError as exc:
            click.echo(
                f"Failed to copy CSS from {config.css_file} to "
                f"{config.output_dir / STYLESHEET_NAME}: {exc}",
                err=True,
            )
            result.stylesheet_error = exc
    return result


def build_project(project_root: Path) -> BuildResult:
    """Load mdpress.yaml from ``project_root`` and build the site.

    Raises:
        BuildError: On any fatal error, including ConfigError.
    """
    return build_site(load_config(project_root))
