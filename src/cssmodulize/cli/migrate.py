"""CLI command: cssmodulize migrate -- rewrite component files in place."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterator

import click

from cssmodulize.cli.options import build_config, config_options
from cssmodulize.migrator import Migrator
from cssmodulize.model.outcome import Status

SOURCE_SUFFIXES = {".js", ".jsx", ".ts", ".tsx"}
_SKIPPED_DIRS = {"node_modules", ".git"}


def iter_source_files(paths: tuple[str, ...]) -> Iterator[Path]:
    """Yield the given files, and the component sources under given directories."""
    for raw in paths:
        path = Path(raw)
        if path.is_file():
            yield path
            continue
        for candidate in sorted(path.rglob("*")):
            if _SKIPPED_DIRS.intersection(candidate.parts):
                continue
            if candidate.is_file() and candidate.suffix in SOURCE_SUFFIXES:
                yield candidate


@click.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True))
@click.option("--dry-run", is_flag=True, help="Report what would change without writing")
@config_options
def migrate(paths: tuple[str, ...], dry_run: bool, **options: object) -> None:
    """Migrate component files (or directories of them) in place.

    Each migrated file gets a sibling ``.module.css`` file when it declared a
    style table. Files that fail are listed and appended to the error log;
    the remaining files are still migrated.
    """
    config = build_config(**options)  # type: ignore[arg-type]
    migrator = Migrator(config)

    outcomes = migrator.migrate_files(iter_source_files(paths), dry_run=dry_run)

    for outcome in outcomes:
        line = f"{outcome.status.value:<10} {outcome.path}"
        if outcome.stylesheet_path is not None:
            line += f" -> {outcome.stylesheet_path.name}"
        if outcome.failure_reason:
            line += f"  ({outcome.failure_reason})"
        click.echo(line, err=outcome.failed)

    counts = {status: sum(1 for o in outcomes if o.status is status) for status in Status}
    click.echo()
    click.echo(
        f"Summary: {counts[Status.MIGRATED]} migrated, "
        f"{counts[Status.UNCHANGED]} unchanged, {counts[Status.FAILED]} failed"
        + (" (dry run)" if dry_run else "")
    )

    if counts[Status.FAILED]:
        sys.exit(1)
    sys.exit(0)
