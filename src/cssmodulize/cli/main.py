"""cssmodulize CLI entry point: Click group with subcommands."""

import click

from cssmodulize import __version__


@click.group()
@click.version_option(version=__version__, prog_name="cssmodulize")
def cli() -> None:
    """cssmodulize - move object-literal styles to CSS Modules and classnames."""


# Import and register subcommands
from cssmodulize.cli.convert import convert  # noqa: E402
from cssmodulize.cli.migrate import migrate  # noqa: E402

cli.add_command(migrate)
cli.add_command(convert)
