"""Build the evaluation scope from a definitions file.

Two kinds of definitions files are understood:

- JavaScript (``.js``, ``.mjs``, ``.cjs``): top-level ``const``/``let``/``var``
  bindings and functions whose body is a single expression. Bindings the
  interpreter cannot run are kept as :class:`Unsupported` markers and only
  fail when an expression uses them.
- Python (``.py``): the module's public attributes.
"""

from __future__ import annotations

import importlib.util
import logging
from pathlib import Path
from typing import Any

from cssmodulize.context.interpreter import (
    JsFunction,
    Unsupported,
    evaluate,
    parse_expression,
)
from cssmodulize.context.values import UNDEFINED, ExpressionError
from cssmodulize.errors import MigrationError
from cssmodulize.source import Node, SourceFile, members

__all__ = ["load_scope"]

logger = logging.getLogger(__name__)

_DECLARATIONS = {"lexical_declaration", "variable_declaration"}
_FUNCTIONS = {"function_declaration", "function_expression", "function", "arrow_function"}


def load_scope(path: Path) -> dict[str, Any]:
    """Load the definitions at *path* into a name -> value mapping."""
    try:
        if path.suffix == ".py":
            scope = _load_python(path)
        else:
            scope = _load_javascript(path)
    except ExpressionError:
        raise
    except (OSError, MigrationError, SyntaxError, ImportError) as e:
        raise ExpressionError(f"could not load definitions: {e}") from e
    logger.debug("Loaded %d definitions from %s", len(scope), path)
    return scope


def _load_python(path: Path) -> dict[str, Any]:
    spec = importlib.util.spec_from_file_location(f"_cssmodulize_context_{path.stem}", path)
    if spec is None or spec.loader is None:
        raise ImportError(f"cannot import {path}")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return {name: value for name, value in vars(module).items() if not name.startswith("_")}


def _load_javascript(path: Path) -> dict[str, Any]:
    source = SourceFile(path.read_text(encoding="utf-8"), path)
    scope: dict[str, Any] = {}
    for statement in source.statements():
        if statement.type == "export_statement":
            declaration = statement.child_by_field_name("declaration")
            if declaration is None:
                continue
            statement = declaration

        if statement.type == "function_declaration":
            name_node = statement.child_by_field_name("name")
            if name_node is not None:
                name = source.node_text(name_node)
                scope[name] = _function(source, name, statement, scope)
        elif statement.type in _DECLARATIONS:
            for declarator in members(statement):
                if declarator.type != "variable_declarator":
                    continue
                _bind(source, declarator, scope)
    return scope


def _bind(source: SourceFile, declarator: Node, scope: dict[str, Any]) -> None:
    name_node = declarator.child_by_field_name("name")
    if name_node is None or name_node.type != "identifier":
        return
    name = source.node_text(name_node)
    value = declarator.child_by_field_name("value")
    if value is None:
        scope[name] = UNDEFINED
    elif value.type in _FUNCTIONS:
        scope[name] = _function(source, name, value, scope)
    else:
        try:
            scope[name] = evaluate(parse_expression(source.node_text(value)), scope)
        except ExpressionError as e:
            scope[name] = Unsupported(name, str(e))


def _function(
    source: SourceFile, name: str, node: Node, scope: dict[str, Any]
) -> JsFunction | Unsupported:
    params = _parameters(source, node)
    if params is None:
        return Unsupported(name, "only plain parameters are supported")

    body = node.child_by_field_name("body")
    if body is None:
        return Unsupported(name, "function has no body")
    if body.type == "statement_block":
        statements = [child for child in members(body) if child.type != "empty_statement"]
        if len(statements) != 1 or statements[0].type != "return_statement":
            return Unsupported(name, "function body must be a single return statement")
        returned = [child for child in statements[0].named_children if child.type != "comment"]
        if len(returned) != 1:
            return Unsupported(name, "function must return a value")
        body = returned[0]

    try:
        tree = parse_expression(source.node_text(body))
    except ExpressionError as e:
        return Unsupported(name, str(e))
    return JsFunction(name=name, params=tuple(params), body=tree, closure=scope)


def _parameters(source: SourceFile, node: Node) -> list[str] | None:
    single = node.child_by_field_name("parameter")
    if single is not None:
        return [source.node_text(single)] if single.type == "identifier" else None

    parameters = node.child_by_field_name("parameters")
    if parameters is None:
        return []
    names: list[str] = []
    for param in parameters.named_children:
        if param.type == "comment":
            continue
        if param.type in ("required_parameter", "optional_parameter"):
            if param.child_by_field_name("value") is not None:
                return None
            param = param.child_by_field_name("pattern") or param
        if param.type != "identifier":
            return None
        names.append(source.node_text(param))
    return names
