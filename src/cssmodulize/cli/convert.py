"""CLI command: cssmodulize convert -- print the stylesheet for one file."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from cssmodulize.cli.options import build_config, config_options
from cssmodulize.errors import MigrationError
from cssmodulize.migrator import Migrator


@click.command()
@click.argument("sourcefile", type=click.Path(exists=True, dir_okay=False))
@click.option("--source", "show_source", is_flag=True, help="Also print the rewritten source")
@config_options
def convert(sourcefile: str, show_source: bool, **options: object) -> None:
    """Print the stylesheet a file would produce, leaving the file untouched."""
    config = build_config(**options)  # type: ignore[arg-type]
    path = Path(sourcefile)

    try:
        result = Migrator(config).transform(path.read_text(encoding="utf-8"), path)
    except MigrationError as exc:
        click.echo(f"Migration error: {exc}", err=True)
        sys.exit(1)

    if result.stylesheet is None:
        click.echo(f"No style table found in {path.name}", err=True)
    else:
        click.echo(f"/* {result.stylesheet_path} */")
        click.echo(result.stylesheet)

    if show_source:
        click.echo()
        click.echo(result.source, nl=False)
