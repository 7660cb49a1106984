"""Error hierarchy for the style migration engine."""

from __future__ import annotations


class MigrationError(Exception):
    """Base error for every fatal condition raised while migrating a file.

    ``message`` is the short, single-line description written to the error
    log. ``snippet`` is the source text of the offending node, if known, and
    is only included in the string form of the exception.
    """

    def __init__(self, message: str, *, snippet: str | None = None) -> None:
        self.message = message
        self.snippet = snippet
        if snippet:
            super().__init__(f"{message}\n\n{snippet}\n")
        else:
            super().__init__(message)


class UnhandledShape(MigrationError):
    """An argument, declaration, key or comment has a shape we do not convert."""


class AmbiguousStructure(MigrationError):
    """The file's imports cannot be edited without guessing (duplicates, collisions)."""


class UnsupportedFeature(MigrationError):
    """The file uses a construct the engine refuses to touch (aliased imports)."""


class UnresolvedExpression(MigrationError):
    """A dynamic style value could not be resolved against the context scope."""
