"""cssmodulize model layer -- public type re-exports."""

from cssmodulize.model.outcome import FileOutcome, Status, TransformResult
from cssmodulize.model.style_table import (
    Comment,
    Comments,
    Declaration,
    Member,
    NestedGroup,
    StyleGroup,
    StyleTable,
)

__all__ = [
    # style table
    "Comment",
    "Comments",
    "Declaration",
    "Member",
    "NestedGroup",
    "StyleGroup",
    "StyleTable",
    # outcome
    "Status",
    "TransformResult",
    "FileOutcome",
]
