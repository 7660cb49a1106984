from cssmodulize.context.evaluator import ContextEvaluator
from cssmodulize.context.interpreter import JsFunction, Unsupported, parse_expression
from cssmodulize.context.scope import load_scope
from cssmodulize.context.values import UNDEFINED, ExpressionError, to_js_string

__all__ = [
    "UNDEFINED",
    "ContextEvaluator",
    "ExpressionError",
    "JsFunction",
    "Unsupported",
    "load_scope",
    "parse_expression",
    "to_js_string",
]
