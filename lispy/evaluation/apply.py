"""Application engine for Lispy.

This module centralizes function application semantics for the interpreter:
- Application of builtins registered in the root environment.
- Positional binding of lambda formals, including the `&` rest marker.
- Partial application: a lambda given fewer arguments than formals returns
  itself with the supplied arguments bound, ready to be called again.

The evaluator passes itself in as `evaluate_fn` so this module does not import
it back.
"""

from __future__ import annotations

import logging

from lispy import EvaluatorFn
from lispy.types.environment import Environment
from lispy.types.lambda_fn import Lambda
from lispy.types.symbol import Symbol, VARIADIC
from lispy.types.value import Builtin, Error, Expression, Function, QExpression, SExpression, Value

logger = logging.getLogger(__name__)

MALFORMED_VARIADIC = "Function format invalid. Symbol '&' not followed by single symbol."


def _quoted_literals(expr: Expression, found: dict[int, Value]) -> dict[int, Value]:
    """Every Q-expression nested in `expr`, keyed by identity."""
    for cell in expr:
        if isinstance(cell, QExpression):
            found[id(cell)] = cell
        if isinstance(cell, Expression):
            _quoted_literals(cell, found)
    return found


def apply_lambda(
    fn: Lambda,
    args: SExpression,
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Value:
    """Apply a Lambda to already-evaluated arguments.

    `fn` and `args` are owned by this call: formals are consumed from `fn` as
    they are bound, so a partially applied result is simply `fn` itself.
    """
    given = len(args)
    total = len(fn.formals)

    while len(args) > 0:
        if len(fn.formals) == 0:
            return Error(
                f"Function passed too many arguments. Expected {total}. Got {given}."
            )
        symbol: Symbol = fn.formals.pop(0)

        if symbol == VARIADIC:
            if len(fn.formals) != 1:
                return Error(MALFORMED_VARIADIC)
            rest: Symbol = fn.formals.pop(0)
            fn.env.put(rest, args.as_qexpr())
            break

        fn.env.put(symbol, args.pop(0))

    # A trailing `& name` with no arguments left binds name to {}
    if len(fn.formals) > 0 and fn.formals[0] == VARIADIC:
        if len(fn.formals) != 2:
            return Error(MALFORMED_VARIADIC)
        fn.formals.pop(0)
        fn.env.put(fn.formals.pop(0), QExpression())

    if len(fn.formals) > 0:
        logger.debug("Partially applied %s with %d argument(s)", fn, given)
        return fn

    fn.env.outer = env
    body = fn.body.copy()
    fn.env.literals = _quoted_literals(body, {})
    return evaluate_fn(fn.env, body.as_sexpr())


def apply(
    head: Function,
    args: SExpression,
    env: Environment,
    evaluate_fn: EvaluatorFn,
) -> Value:
    """Apply either a Builtin or a Lambda.

    - For Builtin, invoke the native operation with the calling env and args.
    - For Lambda, defer to apply_lambda (handling partials and `&`).
    """
    if isinstance(head, Builtin):
        return head(env, args)
    if isinstance(head, Lambda):
        return apply_lambda(head, args, env, evaluate_fn)
    return Error(f"Cannot apply non-function '{head.type_name}'")
