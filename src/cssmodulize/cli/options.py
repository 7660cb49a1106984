"""Options shared by the CLI commands.

Options left unset fall back to the environment variables read by
``MigrationConfig.from_env`` and then to the config defaults.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

import click

from cssmodulize.config import MigrationConfig

_DEFAULTS = MigrationConfig()

_OPTIONS = [
    click.option(
        "--helper",
        default=None,
        help=f"Styling helper whose calls are migrated [default: {_DEFAULTS.helper_name}]",
    ),
    click.option(
        "--composer",
        default=None,
        help=f"Class-list composer identifier, or $CLASS_NAMES_NAME [default: {_DEFAULTS.composer_name}]",
    ),
    click.option(
        "--precedence-comment",
        default=None,
        help="Comment attached to calls whose CSS precedence needs checking, or $CHECK_PRECEDENCE_COMMENT",
    ),
    click.option(
        "--error-log",
        default=None,
        help=f"File that failures are appended to, or $ERROR_FILE_PATH [default: {_DEFAULTS.error_log_path}]",
    ),
    click.option(
        "--context",
        "context_path",
        default=None,
        help=f"Definitions file used to resolve dynamic values, or $CONTEXT_FILE_PATH [default: {_DEFAULTS.context_path}]",
    ),
    click.option("--verbose", "-v", is_flag=True, help="Log progress"),
]


def config_options(command: Callable[..., Any]) -> Callable[..., Any]:
    """Decorate *command* with the migration configuration options."""
    for option in reversed(_OPTIONS):
        command = option(command)
    return command


def build_config(
    helper: str | None,
    composer: str | None,
    precedence_comment: str | None,
    error_log: str | None,
    context_path: str | None,
    verbose: bool,
) -> MigrationConfig:
    """Configure logging and return the config for the given option values."""
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return MigrationConfig.from_env(
        helper_name=helper,
        composer_name=composer,
        precedence_comment=precedence_comment,
        error_log_path=error_log,
        context_path=context_path,
    )
