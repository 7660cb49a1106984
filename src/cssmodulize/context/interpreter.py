"""Lark grammar and tree interpreter for the restricted expression language."""

from __future__ import annotations

import math
from collections import ChainMap
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

from lark import Lark, Token, Tree
from lark.exceptions import LarkError
from lark.visitors import Interpreter

from cssmodulize.context.values import (
    UNDEFINED,
    ExpressionError,
    get_property,
    to_js_string,
    to_number,
    truthy,
)
from cssmodulize.source.literals import format_number, parse_number, unescape

__all__ = [
    "JsFunction",
    "Unsupported",
    "evaluate",
    "parse_expression",
    "split_template",
]

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"


@lru_cache(maxsize=None)
def _parser() -> Lark:
    return Lark(GRAMMAR_PATH.read_text(), parser="lalr", start="start")


def parse_expression(source: str) -> Tree:
    """Parse *source* into an expression tree."""
    try:
        return _parser().parse(source)
    except LarkError as e:
        raise ExpressionError(f"unsupported expression {source.strip()!r}") from e


@dataclass(frozen=True)
class Unsupported:
    """A definitions binding whose initialiser the interpreter cannot run."""

    name: str
    reason: str


@dataclass(frozen=True)
class JsFunction:
    """A function from a JavaScript definitions file with an expression body."""

    name: str
    params: tuple[str, ...]
    body: Tree
    closure: Mapping[str, Any]

    def __call__(self, *args: Any) -> Any:
        local = {
            param: args[i] if i < len(args) else UNDEFINED
            for i, param in enumerate(self.params)
        }
        return evaluate(self.body, ChainMap(local, self.closure))  # type: ignore[arg-type]


def split_template(raw: str) -> list[tuple[str, str | None]]:
    """Split the body of a template literal into ``(text, expression)`` chunks.

    The last chunk's expression is ``None``.
    """
    chunks: list[tuple[str, str | None]] = []
    chunk_start = 0
    i = 0
    while i < len(raw):
        if raw[i] == "\\":
            i += 2
            continue
        if raw.startswith("${", i):
            end = _closing_brace(raw, i + 2)
            chunks.append((raw[chunk_start:i], raw[i + 2 : end]))
            i = chunk_start = end + 1
            continue
        i += 1
    chunks.append((raw[chunk_start:], None))
    return chunks


def _closing_brace(raw: str, pos: int) -> int:
    depth = 1
    quote: str | None = None
    i = pos
    while i < len(raw):
        char = raw[i]
        if quote:
            if char == "\\":
                i += 2
                continue
            if char == quote:
                quote = None
        elif char in "'\"`":
            quote = char
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return i
        i += 1
    raise ExpressionError("unterminated template substitution")


def _divide(left: int | float, right: int | float) -> int | float:
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1, right)
    result = left / right
    return int(result) if result.is_integer() else result


def _strict_equal(left: Any, right: Any) -> bool:
    if isinstance(left, bool) or isinstance(right, bool):
        return isinstance(left, bool) and isinstance(right, bool) and left == right
    if isinstance(left, (int, float)) and isinstance(right, (int, float)):
        return left == right
    if type(left) is not type(right):
        return False
    if isinstance(left, (str, type(None))) or left is UNDEFINED:
        return left == right
    return left is right


class _Evaluator(Interpreter):  # type: ignore[type-arg]
    """Evaluate an expression tree against a read-only scope."""

    def __init__(self, scope: Mapping[str, Any]) -> None:
        self.scope = scope

    def _eval(self, node: Tree | Token) -> Any:
        return self.visit(node)

    # ---- literals ----

    def number(self, tree: Tree) -> int | float:
        return parse_number(str(tree.children[0]))

    def string(self, tree: Tree) -> str:
        return unescape(str(tree.children[0])[1:-1])

    def template(self, tree: Tree) -> str:
        parts: list[str] = []
        for text, expression in split_template(str(tree.children[0])[1:-1]):
            parts.append(unescape(text))
            if expression is not None:
                parts.append(to_js_string(self._eval(parse_expression(expression))))
        return "".join(parts)

    def true(self, tree: Tree) -> bool:
        return True

    def false(self, tree: Tree) -> bool:
        return False

    def null(self, tree: Tree) -> None:
        return None

    def undefined(self, tree: Tree) -> Any:
        return UNDEFINED

    def array(self, tree: Tree) -> list[Any]:
        return [self._eval(child) for child in tree.children if child is not None]

    def object(self, tree: Tree) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for pair in tree.children:
            if pair is None:
                continue
            if pair.data == "shorthand":
                key = str(pair.children[0])
                result[key] = self._lookup(key)
            else:
                token, value = pair.children
                result[self._key(token)] = self._eval(value)
        return result

    @staticmethod
    def _key(token: Token) -> str:
        if token.type == "STRING":
            return unescape(str(token)[1:-1])
        if token.type == "NUMBER":
            return format_number(parse_number(str(token)))
        return str(token)

    # ---- names and access ----

    def _lookup(self, name: str) -> Any:
        if name not in self.scope:
            raise ExpressionError(f"{name} is not defined")
        value = self.scope[name]
        if isinstance(value, Unsupported):
            raise ExpressionError(
                f"{name} cannot be used from the definitions file ({value.reason})"
            )
        return value

    def name(self, tree: Tree) -> Any:
        return self._lookup(str(tree.children[0]))

    def member(self, tree: Tree) -> Any:
        return get_property(self._eval(tree.children[0]), str(tree.children[1]))

    def index(self, tree: Tree) -> Any:
        return get_property(self._eval(tree.children[0]), self._eval(tree.children[1]))

    def call(self, tree: Tree) -> Any:
        callee_node, arguments = tree.children
        callee = self._eval(callee_node)
        args = [self._eval(a) for a in arguments.children] if arguments is not None else []
        if not callable(callee) or isinstance(callee, type):
            raise ExpressionError(f"{to_js_string(callee)} is not a function")
        try:
            return callee(*args)
        except ExpressionError:
            raise
        except Exception as e:
            raise ExpressionError(f"call failed: {e}") from e

    # ---- operators ----

    def neg(self, tree: Tree) -> int | float:
        return -to_number(self._eval(tree.children[0]))

    def pos(self, tree: Tree) -> int | float:
        return to_number(self._eval(tree.children[0]))

    def not_(self, tree: Tree) -> bool:
        return not truthy(self._eval(tree.children[0]))

    def add(self, tree: Tree) -> Any:
        left, right = (self._eval(c) for c in tree.children)
        if isinstance(left, (str, list, tuple, Mapping)) or isinstance(
            right, (str, list, tuple, Mapping)
        ):
            return to_js_string(left) + to_js_string(right)
        return to_number(left) + to_number(right)

    def sub(self, tree: Tree) -> int | float:
        left, right = (to_number(self._eval(c)) for c in tree.children)
        return left - right

    def mul(self, tree: Tree) -> int | float:
        left, right = (to_number(self._eval(c)) for c in tree.children)
        return left * right

    def div(self, tree: Tree) -> int | float:
        left, right = (to_number(self._eval(c)) for c in tree.children)
        return _divide(left, right)

    def mod(self, tree: Tree) -> int | float:
        left, right = (to_number(self._eval(c)) for c in tree.children)
        if right == 0:
            return math.nan
        return math.fmod(left, right)

    def strict_eq(self, tree: Tree) -> bool:
        return _strict_equal(*(self._eval(c) for c in tree.children))

    def strict_ne(self, tree: Tree) -> bool:
        return not _strict_equal(*(self._eval(c) for c in tree.children))

    def and_(self, tree: Tree) -> Any:
        left = self._eval(tree.children[0])
        return self._eval(tree.children[1]) if truthy(left) else left

    def or_(self, tree: Tree) -> Any:
        left = self._eval(tree.children[0])
        return left if truthy(left) else self._eval(tree.children[1])

    def coalesce(self, tree: Tree) -> Any:
        left = self._eval(tree.children[0])
        if left is None or left is UNDEFINED:
            return self._eval(tree.children[1])
        return left

    def conditional(self, tree: Tree) -> Any:
        condition, consequence, alternative = tree.children
        return self._eval(consequence if truthy(self._eval(condition)) else alternative)


def evaluate(tree: Tree, scope: Mapping[str, Any] | MutableMapping[str, Any]) -> Any:
    """Evaluate a parsed expression against *scope*."""
    return _Evaluator(scope).visit(tree)
