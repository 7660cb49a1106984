"""cssmodulize - migrate object-literal component styles to CSS Modules."""

__version__ = "0.1.0"

from cssmodulize.config import MigrationConfig  # noqa: E402
from cssmodulize.errors import (  # noqa: E402
    AmbiguousStructure,
    MigrationError,
    UnhandledShape,
    UnresolvedExpression,
    UnsupportedFeature,
)
from cssmodulize.migrator import Migrator, stylesheet_paths  # noqa: E402

__all__ = [
    "__version__",
    "AmbiguousStructure",
    "MigrationConfig",
    "MigrationError",
    "Migrator",
    "UnhandledShape",
    "UnresolvedExpression",
    "UnsupportedFeature",
    "stylesheet_paths",
]
