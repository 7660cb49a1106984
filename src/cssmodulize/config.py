from __future__ import annotations

import os
from dataclasses import dataclass, fields
from typing import Mapping

# Environment variable -> config field.
ENV_VARS = {
    "CHECK_PRECEDENCE_COMMENT": "precedence_comment",
    "CLASS_NAMES_NAME": "composer_name",
    "CONTEXT_FILE_PATH": "context_path",
    "ERROR_FILE_PATH": "error_log_path",
}


@dataclass(frozen=True)
class MigrationConfig:
    helper_name: str = "css"
    composer_name: str = "classNames"
    composer_module: str = "classnames"
    styles_module: str = "aphrodite"
    factory_name: str = "StyleSheet"
    factory_method: str = "create"
    precedence_comment: str = " TODO: check CSS precedence"
    error_log_path: str = "./errors.txt"
    context_path: str = "./context.example.js"
    stylesheet_suffix: str = ".module.css"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: str | None) -> MigrationConfig:
        """Build a config from environment variables, then *overrides*."""
        environ = os.environ if environ is None else environ
        known = {f.name for f in fields(cls)}
        values = {field: environ[var] for var, field in ENV_VARS.items() if var in environ}
        values.update({k: v for k, v in overrides.items() if k in known and v is not None})
        return cls(**values)
