"""Structural edits to a file's import and export declarations.

Every function takes source text and returns new source text. A module may
be imported by at most one declaration, and aliased named imports of the
names we look for are rejected rather than guessed at.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import PurePath

from cssmodulize.errors import AmbiguousStructure, UnsupportedFeature
from cssmodulize.source import (
    Edit,
    Node,
    SourceFile,
    attach_comments,
    collapse_blank_lines,
    parse_source,
    removal,
)

__all__ = [
    "ImportDeclaration",
    "ImportSpecifier",
    "add_default_import",
    "add_named_exports",
    "find_imports",
    "has_named_imports",
    "remove_named_imports",
]


@dataclass(frozen=True)
class ImportSpecifier:
    """A named import such as ``css`` or ``css as style``."""

    name: str
    alias: str | None
    text: str
    node: Node | None = None

    def matches(self, names: list[str]) -> bool:
        """Return True if this specifier imports one of *names*.

        Raises UnsupportedFeature when a matching import is aliased.
        """
        if self.name not in names:
            return False
        if self.alias is not None and self.alias != self.name:
            raise UnsupportedFeature(
                f"Import aliases are not supported ({self.name} -> {self.alias})",
                snippet=self.text,
            )
        return True


@dataclass(frozen=True)
class ImportDeclaration:
    """One ``import ... from "module"`` statement."""

    node: Node
    module: str
    source_text: str
    type_only: bool = False
    default: str | None = None
    namespace: str | None = None
    named: tuple[ImportSpecifier, ...] = ()
    semicolon: bool = True
    quote: str = '"'

    @property
    def is_empty(self) -> bool:
        return self.default is None and self.namespace is None and not self.named

    def render(self) -> str:
        clause: list[str] = []
        if self.default is not None:
            clause.append(self.default)
        if self.namespace is not None:
            clause.append(f"* as {self.namespace}")
        if self.named:
            clause.append("{ " + ", ".join(s.text for s in self.named) + " }")
        keyword = "import type" if self.type_only else "import"
        end = ";" if self.semicolon else ""
        if not clause:
            return f"{keyword} {self.source_text}{end}"
        return f"{keyword} {', '.join(clause)} from {self.source_text}{end}"


def _read_import(source: SourceFile, node: Node) -> ImportDeclaration | None:
    source_node = node.child_by_field_name("source")
    if source_node is None or source_node.type != "string":
        return None
    default = namespace = None
    named: list[ImportSpecifier] = []

    for clause in node.named_children:
        if clause.type != "import_clause":
            continue
        for child in clause.named_children:
            if child.type == "identifier":
                default = source.node_text(child)
            elif child.type == "namespace_import":
                identifiers = [c for c in child.named_children if c.type == "identifier"]
                namespace = source.node_text(identifiers[-1])
            elif child.type == "named_imports":
                for spec in child.named_children:
                    if spec.type != "import_specifier":
                        continue
                    name_node = spec.child_by_field_name("name")
                    alias_node = spec.child_by_field_name("alias")
                    if name_node.type == "string":
                        name = source.string_value(name_node)
                    else:
                        name = source.node_text(name_node)
                    named.append(
                        ImportSpecifier(
                            name=name,
                            alias=source.node_text(alias_node) if alias_node else None,
                            text=source.node_text(spec),
                            node=spec,
                        )
                    )

    source_text = source.node_text(source_node)
    return ImportDeclaration(
        node=node,
        module=source.string_value(source_node),
        source_text=source_text,
        type_only=any(child.type == "type" for child in node.children),
        default=default,
        namespace=namespace,
        named=tuple(named),
        semicolon=source.node_text(node).endswith(";"),
        quote=source_text[0],
    )


def find_imports(source: SourceFile, module: str | None = None) -> list[ImportDeclaration]:
    """Return the top-level import declarations, optionally for one *module*."""
    found: list[ImportDeclaration] = []
    for statement in source.statements():
        if statement.type != "import_statement":
            continue
        declaration = _read_import(source, statement)
        if declaration is None:
            continue
        if module is None or declaration.module == module:
            found.append(declaration)
    return found


def _single_import(source: SourceFile, module: str) -> ImportDeclaration | None:
    declarations = find_imports(source, module)
    if len(declarations) > 1:
        raise AmbiguousStructure(
            "multiple imports of 1 module not supported",
            snippet="\n".join(source.node_text(d.node) for d in declarations),
        )
    return declarations[0] if declarations else None


def has_named_imports(text: str, module: str, names: list[str], path: str | PurePath | None = None) -> bool:
    """Return True if *module* is imported with any of *names* as a named import."""
    source = parse_source(text, path)
    declaration = _single_import(source, module)
    if declaration is None:
        return False
    matched = [spec for spec in declaration.named if spec.matches(names)]
    return bool(matched)


def remove_named_imports(text: str, module: str, names: list[str], path: str | PurePath | None = None) -> str:
    """Remove *names* from *module*'s import, dropping the import if it empties."""
    source = parse_source(text, path)
    edits: list[Edit] = []
    for declaration in find_imports(source, module):
        keep = tuple(spec for spec in declaration.named if not spec.matches(names))
        if len(keep) == len(declaration.named):
            continue
        reduced = replace(declaration, named=keep)
        node = declaration.node
        if reduced.is_empty:
            edits.append(removal(source.data, node.start_byte, node.end_byte))
        elif keep:
            kept = [not spec.matches(names) for spec in declaration.named]
            edits.extend(_specifier_removals(declaration.named, kept))
        else:
            edits.append(Edit(node.start_byte, node.end_byte, reduced.render()))
    if not edits:
        return text
    return source.rewrite(edits)


def _specifier_removals(
    named: tuple[ImportSpecifier, ...], kept: list[bool]
) -> list[Edit]:
    """Edits deleting the specifiers not flagged in *kept*, leaving the rest untouched.

    A removed specifier takes everything up to the next specifier with it;
    removed specifiers after the last kept one are cut back to its end.
    """
    nodes = [spec.node for spec in named]
    last_kept = max(i for i, flag in enumerate(kept) if flag)
    edits = [
        Edit(nodes[i].start_byte, nodes[i + 1].start_byte)
        for i in range(last_kept)
        if not kept[i]
    ]
    if last_kept < len(nodes) - 1:
        edits.append(Edit(nodes[last_kept].end_byte, nodes[-1].end_byte))
    return edits


def _insertion_point(source: SourceFile) -> int:
    """Byte offset of the first statement after any directive prologue.

    Comments directly above that statement stay attached to it.
    """
    for attached in attach_comments(source.root, tail_to_last=False):
        node = attached.node
        if node.type == "hash_bang_line":
            continue
        if node.type == "expression_statement" and node.named_children and node.named_children[0].type == "string":
            continue
        start = node.start_byte
        row = node.start_point[0]
        for comment in reversed(attached.leading):
            if comment.end_point[0] < row - 1:
                break
            start = comment.start_byte
            row = comment.start_point[0]
        return start
    return len(source.data)


def add_default_import(text: str, module: str, local: str, path: str | PurePath | None = None) -> str:
    """Import *module*'s default export as *local*.

    A new declaration goes before the first statement. An existing
    declaration without a default import gains one; an existing default bound
    to another name is an error.
    """
    source = parse_source(text, path)
    declaration = _single_import(source, module)

    if declaration is None:
        existing = find_imports(source)
        quote = existing[0].quote if existing else '"'
        statement = f"import {local} from {quote}{module}{quote};\n"
        offset = _insertion_point(source)
        if offset == len(source.data) and source.data and not source.data.endswith(b"\n"):
            statement = "\n" + statement
        return source.rewrite([Edit(offset, offset, statement)])

    if declaration.default is not None:
        if declaration.default != local:
            raise AmbiguousStructure(
                f"Default import to add (`{local}`) does not match existing default import:",
                snippet=source.node_text(declaration.node),
            )
        return text

    node = declaration.node
    updated = replace(declaration, default=local)
    return source.rewrite([Edit(node.start_byte, node.end_byte, updated.render())])


def add_named_exports(text: str, names: list[str], path: str | PurePath | None = None) -> str:
    """Append ``export { name, ... };`` as the last statement of the file.

    Runs of blank lines between top-level statements collapse to one; text
    inside statements (template literals included) is left alone.
    """
    source = parse_source(text, path)
    edits: list[Edit] = []
    children = source.root.children
    for before, after in zip(children, children[1:]):
        gap = source.data[before.end_byte : after.start_byte].decode("utf-8")
        collapsed = collapse_blank_lines(gap)
        if collapsed != gap:
            edits.append(Edit(before.end_byte, after.start_byte, collapsed))

    statement = f"export {{ {', '.join(names)} }};\n"
    body = source.rewrite(edits).rstrip() if edits else text.rstrip()
    if not body:
        return statement
    return f"{body}\n\n{statement}"
