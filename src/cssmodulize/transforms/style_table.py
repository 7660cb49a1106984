"""Style-table extraction: turn ``StyleSheet.create({...})`` into stylesheet text."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath

from cssmodulize.config import MigrationConfig
from cssmodulize.context import ContextEvaluator
from cssmodulize.css import add_unit, hyphenate_style_name, render_stylesheet
from cssmodulize.errors import UnhandledShape
from cssmodulize.model.style_table import (
    Comment,
    Comments,
    Declaration,
    Member,
    NestedGroup,
    StyleGroup,
    StyleTable,
)
from cssmodulize.source import (
    Attached,
    Node,
    SourceFile,
    attach_comments,
    members,
    parse_source,
    removal,
)
from cssmodulize.source.literals import parse_number

__all__ = ["ExtractionResult", "StyleTableExtraction"]

_DECLARATIONS = {"lexical_declaration", "variable_declaration"}

# Value shapes resolved through the context evaluator.
_DYNAMIC_VALUES = {
    "binary_expression",
    "call_expression",
    "identifier",
    "member_expression",
    "subscript_expression",
    "template_string",
}


@dataclass(frozen=True)
class ExtractionResult:
    """The source with the style table removed, and the stylesheet built from it."""

    source: str
    table: StyleTable | None = None
    stylesheet: str | None = None


class StyleTableExtraction:
    """Find the file's style table, convert it to CSS and remove it."""

    def __init__(
        self,
        config: MigrationConfig | None = None,
        evaluator: ContextEvaluator | None = None,
    ) -> None:
        self.config = config or MigrationConfig()
        self.evaluator = evaluator or ContextEvaluator(self.config.context_path)

    def apply(self, text: str, path: str | PurePath | None = None) -> ExtractionResult:
        source = parse_source(text, path)
        for attached in attach_comments(source.root, tail_to_last=False):
            match = self._match(source, attached.node)
            if match is None:
                continue
            # Only the first style table of a file is converted.
            name, styles, exported = match
            table = StyleTable(
                name=name,
                exported=exported,
                groups=tuple(self._group(source, a) for a in self._pairs(source, styles)),
                comments=_comments(source, attached),
            )
            edit = removal(source.data, attached.start_byte, attached.end_byte)
            return ExtractionResult(
                source=source.rewrite([edit]),
                table=table,
                stylesheet=render_stylesheet(table),
            )
        return ExtractionResult(source=text)

    # ---- matching ----

    def _match(self, source: SourceFile, statement: Node) -> tuple[str, Node, bool] | None:
        """Return (binding name, styles object, exported) for a style table binding."""
        exported = statement.type == "export_statement"
        if exported:
            statement = statement.child_by_field_name("declaration")
            if statement is None:
                return None
        if statement.type not in _DECLARATIONS:
            return None

        declarators = [m for m in members(statement) if m.type == "variable_declarator"]
        if len(declarators) != 1:
            return None
        declarator = declarators[0]
        call = declarator.child_by_field_name("value")
        if call is None or call.type != "call_expression":
            return None
        callee = call.child_by_field_name("function")
        if callee is None or callee.type != "member_expression":
            return None
        obj = callee.child_by_field_name("object")
        prop = callee.child_by_field_name("property")
        if obj is None or obj.type != "identifier" or source.node_text(obj) != self.config.factory_name:
            return None
        if prop is None or prop.type != "property_identifier" or source.node_text(prop) != self.config.factory_method:
            return None
        arguments = call.child_by_field_name("arguments")
        if arguments is None or arguments.type != "arguments":
            return None
        args = members(arguments)
        if len(args) != 1 or args[0].type != "object":
            return None

        name = declarator.child_by_field_name("name")
        if name.type != "identifier":
            raise UnhandledShape(
                f'variableDeclarator type "{name.type}" not handled',
                snippet=source.node_text(declarator),
            )
        return source.node_text(name), args[0], exported

    # ---- conversion ----

    @staticmethod
    def _pairs(source: SourceFile, obj: Node) -> list[Attached]:
        attached = attach_comments(obj)
        for item in attached:
            if item.node.type != "pair":
                raise UnhandledShape(
                    f'property of type "{item.node.type}" not handled',
                    snippet=source.node_text(item.node),
                )
        return attached

    def _group(self, source: SourceFile, attached: Attached) -> StyleGroup:
        pair = attached.node
        key = pair.child_by_field_name("key")
        if key.type == "property_identifier":
            name = source.node_text(key)
        elif key.type == "string":
            name = source.string_value(key)
        else:
            raise UnhandledShape(
                f'ruleSetProperty key type "{key.type}" not handled',
                snippet=source.node_text(pair),
            )
        return StyleGroup(
            name=name,
            members=self._members(source, pair),
            comments=_comments(source, attached),
        )

    def _members(self, source: SourceFile, pair: Node) -> tuple[Member, ...]:
        value = pair.child_by_field_name("value")
        if value.type != "object":
            raise UnhandledShape(
                f'ruleSetProperty value type "{value.type}" not handled',
                snippet=source.node_text(pair),
            )
        result: list[Member] = []
        for attached in self._pairs(source, value):
            key = attached.node.child_by_field_name("key")
            if key.type == "string" and source.string_value(key).startswith(":"):
                result.append(
                    NestedGroup(
                        key=source.string_value(key),
                        members=self._members(source, attached.node),
                        comments=_comments(source, attached),
                    )
                )
            else:
                result.append(self._declaration(source, attached))
        return tuple(result)

    def _declaration(self, source: SourceFile, attached: Attached) -> Declaration:
        pair = attached.node
        key = pair.child_by_field_name("key")
        if key.type == "string":
            raise UnhandledShape(
                "string property without ':' prefix not handled",
                snippet=source.node_text(pair),
            )
        if key.type != "property_identifier":
            raise UnhandledShape(
                f'cssDeclarationProperty key type "{key.type}" not handled',
                snippet=source.node_text(pair),
            )
        camel_cased = source.node_text(key)
        return Declaration(
            property=hyphenate_style_name(camel_cased),
            value=self._value(source, camel_cased, pair),
            comments=_comments(source, attached),
        )

    def _value(self, source: SourceFile, camel_cased: str, pair: Node) -> str:
        value = pair.child_by_field_name("value")
        if value.type == "number":
            return add_unit(camel_cased, parse_number(source.node_text(value)))
        if value.type == "string":
            return source.string_value(value)
        if value.type == "unary_expression":
            operator = value.child_by_field_name("operator")
            argument = value.child_by_field_name("argument")
            if argument.type != "number":
                raise UnhandledShape(
                    f'argument type "{argument.type}" in UnaryExpression not handled',
                    snippet=source.node_text(pair),
                )
            magnitude = add_unit(camel_cased, parse_number(source.node_text(argument)))
            return f"{source.node_text(operator)}{magnitude}"
        if value.type in _DYNAMIC_VALUES:
            return self.evaluator.evaluate(source.node_text(value))
        raise UnhandledShape(
            f'cssDeclarationProperty value type "{value.type}" not handled',
            snippet=source.node_text(pair),
        )


def _comments(source: SourceFile, attached: Attached) -> Comments:
    return Comments(
        leading=tuple(_comment(source, c) for c in attached.leading),
        trailing=tuple(_comment(source, c) for c in attached.trailing),
    )


def _comment(source: SourceFile, node: Node) -> Comment:
    text = source.node_text(node)
    if not text.startswith(("//", "/*")):
        raise UnhandledShape(f'comment type "{text[:4]}" not handled', snippet=text)
    return Comment(text)
