"""Call-site migration: rewrite ``css(...)`` calls by argument shape.

- ``css(a ? b : c)``, ``css(a.b)`` and ``css(a[b])`` become the argument,
  with any parentheses around it kept.
- ``css(a && b)`` and ``css(a || b)`` call the composer instead.
- ``css([a, b])``, ``css()`` and ``css(a, b)`` call the composer and get a
  comment asking for the CSS precedence to be checked.
- Any other single argument is an UnhandledShape.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import PurePath

from cssmodulize.config import MigrationConfig
from cssmodulize.errors import UnhandledShape
from cssmodulize.source import Edit, Node, SourceFile, iter_nodes, members, parse_source

__all__ = ["CallSiteAction", "CallSiteMigration", "CallSiteResult", "classify_call"]

_LOGICAL_OPERATORS = {"&&", "||", "??"}
_REFERENCE_TYPES = {"identifier", "shorthand_property_identifier"}
# Parents in which a bare conditional expression needs no parentheses.
_STATEMENT_LIKE_PARENTS = {
    "arguments",
    "array",
    "arrow_function",
    "assignment_expression",
    "expression_statement",
    "jsx_expression",
    "pair",
    "parenthesized_expression",
    "return_statement",
    "variable_declarator",
}


class CallSiteAction(Enum):
    """What to do with one helper call."""

    UNWRAP = "unwrap"
    COMPOSE = "compose"
    COMPOSE_FOR_REVIEW = "compose_for_review"


@dataclass(frozen=True)
class CallSiteResult:
    """Rewritten source plus what the orchestrator needs to fix imports."""

    source: str
    fully_migrated: bool
    used_composer: bool
    rewritten: int = 0


def classify_call(source: SourceFile, arguments: list[Node]) -> CallSiteAction:
    """Pick the rewrite for a helper call with the given argument nodes."""
    if len(arguments) != 1:
        return CallSiteAction.COMPOSE_FOR_REVIEW
    arg = _unparenthesized(arguments[0])
    if arg.type in ("ternary_expression", "member_expression", "subscript_expression"):
        return CallSiteAction.UNWRAP
    if arg.type == "binary_expression":
        operator = arg.child_by_field_name("operator")
        if operator is not None and operator.type in _LOGICAL_OPERATORS:
            return CallSiteAction.COMPOSE
    if arg.type == "array":
        return CallSiteAction.COMPOSE_FOR_REVIEW
    raise UnhandledShape(
        f'arg.type of "{arg.type}" is not handled', snippet=source.node_text(arg)
    )


def _unparenthesized(node: Node) -> Node:
    """Strip redundant parentheses around an argument."""
    while node.type == "parenthesized_expression":
        inner = [child for child in node.named_children if child.type != "comment"]
        if len(inner) != 1:
            break
        node = inner[0]
    return node


class CallSiteMigration:
    """Move every call of the styling helper onto plain expressions or the composer."""

    def __init__(self, config: MigrationConfig | None = None) -> None:
        self.config = config or MigrationConfig()

    def _helper_calls(self, source: SourceFile) -> list[Node]:
        calls: list[Node] = []
        for node in iter_nodes(source.root):
            if node.type != "call_expression":
                continue
            function = node.child_by_field_name("function")
            arguments = node.child_by_field_name("arguments")
            if function is None or function.type != "identifier":
                continue
            if arguments is None or arguments.type != "arguments":
                continue
            if source.node_text(function) == self.config.helper_name:
                calls.append(node)
        return calls

    def apply(self, text: str, path: str | PurePath | None = None) -> CallSiteResult:
        source = parse_source(text, path)
        edits: list[Edit] = []
        callees: set[int] = set()
        used_composer = False

        calls = self._helper_calls(source)
        for call in calls:
            function = call.child_by_field_name("function")
            arguments = members(call.child_by_field_name("arguments"))
            callees.add(function.start_byte)
            action = classify_call(source, arguments)

            if action is CallSiteAction.UNWRAP:
                arg = arguments[0]
                wrap = arg.type == "ternary_expression" and call.parent.type not in _STATEMENT_LIKE_PARENTS
                edits.append(Edit(call.start_byte, arg.start_byte, "(" if wrap else ""))
                edits.append(Edit(arg.end_byte, call.end_byte, ")" if wrap else ""))
                continue

            edits.append(Edit(function.start_byte, function.end_byte, self.config.composer_name))
            used_composer = True
            if action is CallSiteAction.COMPOSE_FOR_REVIEW:
                comment = f"/*{self.config.precedence_comment} */ "
                edits.append(Edit(call.start_byte, call.start_byte, comment))

        return CallSiteResult(
            source=source.rewrite(edits) if edits else text,
            fully_migrated=not self._has_other_references(source, callees),
            used_composer=used_composer,
            rewritten=len(calls),
        )

    def _has_other_references(self, source: SourceFile, callees: set[int]) -> bool:
        """True if the helper is referenced anywhere besides the rewritten calls."""
        for statement in source.statements():
            if statement.type == "import_statement":
                continue
            for node in iter_nodes(statement):
                if node.type not in _REFERENCE_TYPES or node.start_byte in callees:
                    continue
                if source.node_text(node) == self.config.helper_name:
                    return True
        return False
