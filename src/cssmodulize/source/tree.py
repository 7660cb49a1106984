"""Tree-sitter backed, read-only view over a component source file."""

from __future__ import annotations

from functools import lru_cache
from pathlib import PurePath
from typing import Iterable, Iterator

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from cssmodulize.errors import UnhandledShape
from cssmodulize.source.edits import Edit, apply_edits
from cssmodulize.source.literals import unescape

__all__ = ["Node", "SourceFile", "iter_nodes", "members", "parse_source"]

# Punctuation tokens that separate the members of a container node.
_SEPARATORS = {"{", "}", "(", ")", "[", "]", ",", ";"}


@lru_cache(maxsize=None)
def _parser(dialect: str) -> Parser:
    if dialect == "typescript":
        language = Language(tree_sitter_typescript.language_typescript())
    else:
        language = Language(tree_sitter_typescript.language_tsx())
    return Parser(language)


def _dialect_for(path: str | PurePath | None) -> str:
    if path is not None and PurePath(path).suffix == ".ts":
        return "typescript"
    return "tsx"


class SourceFile:
    """Parsed source text plus helpers for reading nodes and producing edits.

    The tree is never mutated. Passes collect :class:`Edit` spans and call
    :meth:`rewrite` to obtain new text, which is re-parsed by the next pass.
    """

    def __init__(self, text: str, path: str | PurePath | None = None) -> None:
        self.text = text
        self.path = path
        self.data = text.encode("utf-8")
        self.tree = _parser(_dialect_for(path)).parse(self.data)
        self.root: Node = self.tree.root_node
        if self.root.has_error:
            raise UnhandledShape(
                "source could not be parsed",
                snippet=self._first_error_line(),
            )

    def node_text(self, node: Node) -> str:
        return self.data[node.start_byte : node.end_byte].decode("utf-8")

    def string_value(self, node: Node) -> str:
        """Return the decoded value of a ``string`` node."""
        raw = self.node_text(node)
        return unescape(raw[1:-1])

    def rewrite(self, edits: Iterable[Edit]) -> str:
        return apply_edits(self.data, edits).decode("utf-8")

    def statements(self) -> list[Node]:
        """Top-level statements, without comments."""
        return [child for child in self.root.named_children if child.type != "comment"]

    def _first_error_line(self) -> str:
        for node in iter_nodes(self.root):
            if node.type == "ERROR" or node.is_missing:
                row = node.start_point[0]
                return self.text.splitlines()[row] if self.text else ""
        return ""


def parse_source(text: str, path: str | PurePath | None = None) -> SourceFile:
    """Parse *text*; the grammar is picked from *path*'s extension."""
    return SourceFile(text, path)


def iter_nodes(node: Node) -> Iterator[Node]:
    """Yield *node* and all of its descendants in document order."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.children))


def members(node: Node) -> list[Node]:
    """Return the non-comment, non-punctuation children of a container node."""
    return [
        child
        for child in node.children
        if child.type != "comment" and child.type not in _SEPARATORS
    ]
