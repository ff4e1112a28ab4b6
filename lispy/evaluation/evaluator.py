"""Core evaluator for the Lispy interpreter.

Symbols evaluate to a copy of their binding, S-expressions are reduced by
function application, and every other value is already in normal form.
Errors are ordinary values: the first one produced while evaluating the
children of an S-expression becomes the result of the whole expression.
"""

from __future__ import annotations

from lispy.evaluation.apply import apply
from lispy.types.environment import Environment
from lispy.types.symbol import Symbol
from lispy.types.value import Error, Function, SExpression, Value


def evaluate(env: Environment, value: Value) -> Value:
    """Reduce `value` (owned by the caller, consumed here) to normal form."""
    if isinstance(value, Symbol):
        return env.get(value)
    if isinstance(value, SExpression):
        return evaluate_sexpression(env, value)
    # --- Atoms, Q-expressions and functions return as-is ---
    return value


def evaluate_sexpression(env: Environment, expr: SExpression) -> Value:
    if len(expr) == 0:
        return expr

    # Children are evaluated in place, left to right; first error wins.
    for i in range(len(expr)):
        expr.cells[i] = evaluate(env, expr.cells[i])
        if isinstance(expr.cells[i], Error):
            return expr.take(i)

    if len(expr) == 1:
        return expr.take(0)

    head = expr.pop(0)
    if not isinstance(head, Function):
        return Error(f"S-expression must start with a function. Got '{head.type_name}'")

    return apply(head, expr, env, evaluate)
