"""Resolve non-literal style values at transform time."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

from cssmodulize.config import MigrationConfig
from cssmodulize.context.interpreter import evaluate, parse_expression
from cssmodulize.context.scope import load_scope
from cssmodulize.context.values import UNDEFINED, ExpressionError, to_js_string
from cssmodulize.errors import UnresolvedExpression

__all__ = ["ContextEvaluator"]


class ContextEvaluator:
    """Evaluate expression source text against a definitions file.

    The definitions are loaded on the first evaluation and reused for the
    lifetime of the evaluator, so a missing file is only an error when a
    value actually needs resolving. Expressions never see bindings from the
    file being migrated.
    """

    def __init__(self, path: str | Path = MigrationConfig.context_path) -> None:
        self.path = Path(path)
        self._scope: dict[str, Any] | None = None

    @property
    def scope(self) -> Mapping[str, Any]:
        if self._scope is None:
            if not self.path.is_file():
                raise ExpressionError(f"definitions file {str(self.path)!r} not found")
            self._scope = load_scope(self.path)
        return self._scope

    def evaluate(self, expression: str) -> str:
        """Return the string value of *expression*."""
        try:
            value = evaluate(parse_expression(expression), self.scope)
        except ExpressionError as e:
            raise self._unresolved(str(e), expression) from e
        if value is UNDEFINED:
            raise self._unresolved("expression evaluated to 'undefined'", expression)
        return to_js_string(value)

    def _unresolved(self, reason: str, expression: str) -> UnresolvedExpression:
        return UnresolvedExpression(
            f'{reason} - Update "{self.path}" to fix.', snippet=expression
        )
