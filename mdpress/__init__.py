"""mdpress static page generator.

This package converts a directory tree of Markdown documents, each optionally
prefixed with YAML front matter, into static HTML pages rendered through a
single shared Jinja2 template. An optional stylesheet is inlined into every
page and copied to the output root.

The main entry point is the CLI module, which exposes the ``build`` command.
The pipeline itself lives in ``build.build_site``:

- config: Loads the fixed-name ``mdpress.yaml`` configuration.
- content: Discovers source documents and derives their output paths.
- extractors: Splits YAML front matter from the Markdown body.
- renderers: Renders Markdown bodies to HTML fragments.
- templates: Merges fragments into the shared page template.
"""

__all__ = ["__version__"]
__version__ = "0.1.0"
