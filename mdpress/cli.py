"""Command-line interface for mdpress.

This module defines the CLI using the Click framework. The only command is
``build``, which reads ``mdpress.yaml`` from the current directory and
renders the site.
"""

from __future__ import annotations

from pathlib import Path

import click

from . import __version__


@click.group()
@click.version_option(version=__version__, prog_name="mdpress")
def cli():
    """mdpress static page generator."""


@cli.command()
def build():
    """Build the site described by mdpress.yaml."""
    project_root = Path.cwd()
    from .build import BuildError, build_project

    try:
        result = build_project(project_root)
    except BuildError as exc:
        click.echo(click.style("Build failed:", fg="red", bold=True), err=True)
        click.echo(click.style(f"  File: {exc.source_path}", fg="yellow"), err=True)
        click.echo(click.style(f"  Error: {exc.message}", fg="white"), err=True)
        raise SystemExit(1) from None

    failed = result.failed
    if failed:
        click.echo(
            click.style(f"{len(failed)} document(s) skipped:", fg="yellow"), err=True
        )
        for page in failed:
            click.echo(f"  {page.source_path}: {page.describe_error()}", err=True)
    click.echo(f"Site generated in {result.output_dir}")


def main():
    """Entry point for the CLI application."""
    cli()
