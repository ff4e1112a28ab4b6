"""Built-in functions for the Lispy runtime environment.

This module defines list processing, evaluation, arithmetic, comparison,
variable definition and lambda construction, and the table that registers
them into a root environment.

Every builtin has the signature ``(env, args) -> Value``: `args` is an owned
S-expression of already evaluated arguments which the builtin may consume.
Failures are returned as Error values, never raised.
"""
from __future__ import annotations

import logging
import operator
from types import MappingProxyType
from typing import Callable, Mapping

from lispy.evaluation.evaluator import evaluate
from lispy.types.environment import Environment
from lispy.types.lambda_fn import Lambda
from lispy.types.symbol import Symbol
from lispy.types.value import (
    Builtin,
    BuiltinFn,
    Error,
    Number,
    QExpression,
    SExpression,
    Value,
)

logger = logging.getLogger(__name__)


# -------------------------------
# Argument checks
# -------------------------------
def _check_count(name: str, args: SExpression, expected: int) -> Error | None:
    if len(args) != expected:
        plural = "argument" if expected == 1 else "arguments"
        return Error(f"Function '{name}' expects {expected} {plural}. Got {len(args)}.")
    return None


def _check_type(name: str, args: SExpression, i: int, expected: type[Value]) -> Error | None:
    if not isinstance(args[i], expected):
        return Error(
            f"Function '{name}' passed incorrect type for argument {i + 1}. "
            f"Got '{args[i].type_name}'. Expected '{expected.type_name}'."
        )
    return None


def _check_not_empty(name: str, args: SExpression, i: int) -> Error | None:
    if len(args[i]) == 0:
        return Error(f"Function '{name}' passed {{}}.")
    return None


def _check_unary_list(name: str, args: SExpression) -> Error | None:
    return (
        _check_count(name, args, 1)
        or _check_type(name, args, 0, QExpression)
        or _check_not_empty(name, args, 0)
    )


# -------------------------------
# List operations
# -------------------------------
def list_builtin(env: Environment, args: SExpression) -> Value:
    """Retag the arguments as a Q-expression."""
    return args.as_qexpr()


def head(env: Environment, args: SExpression) -> Value:
    """Return a Q-expression holding only the first element of a non-empty list."""
    if error := _check_unary_list("head", args):
        return error
    xs = args.take(0)
    del xs.cells[1:]
    return xs


def tail(env: Environment, args: SExpression) -> Value:
    """Return a non-empty list without its first element."""
    if error := _check_unary_list("tail", args):
        return error
    xs = args.take(0)
    xs.pop(0)
    return xs


def join(env: Environment, args: SExpression) -> Value:
    """Concatenate all Q-expression arguments, left to right."""
    for i in range(len(args)):
        if error := _check_type("join", args, i, QExpression):
            return error
    result = QExpression()
    for xs in args:
        result.cells.extend(xs.cells)
    return result


def eval_builtin(env: Environment, args: SExpression) -> Value:
    """Evaluate a Q-expression as if it were an S-expression."""
    if error := _check_count("eval", args, 1) or _check_type("eval", args, 0, QExpression):
        return error
    return evaluate(env, args.take(0).as_sexpr())


# -------------------------------
# Arithmetic
# -------------------------------
def _truncating_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def _truncating_mod(a: int, b: int) -> int:
    """Remainder carrying the sign of the dividend."""
    return a - b * _truncating_div(a, b)


_ARITHMETIC: Mapping[str, Callable[[int, int], int]] = MappingProxyType(
    {
        "+": operator.add,
        "-": operator.sub,
        "*": operator.mul,
        "/": _truncating_div,
        "%": _truncating_mod,
    }
)


def _arithmetic(args: SExpression, op: str) -> Value:
    for cell in args:
        if not isinstance(cell, Number):
            return Error(f"Cannot operate on '{cell.type_name}'. Expected Number.")
    if len(args) == 0:
        return Error(f"Function '{op}' expects at least 1 argument. Got 0.")

    fn = _ARITHMETIC[op]
    x = args.pop(0).value
    if op == "-" and len(args) == 0:
        x = -x

    while len(args) > 0:
        y = args.pop(0).value
        if op in ("/", "%") and y == 0:
            return Error("Division by zero.")
        x = fn(x, y)
    return Number(x)


def add(env: Environment, args: SExpression) -> Value:
    """Sum of all arguments."""
    return _arithmetic(args, "+")


def sub(env: Environment, args: SExpression) -> Value:
    """Subtract all subsequent numbers from the first; unary negation for one arg."""
    return _arithmetic(args, "-")


def mul(env: Environment, args: SExpression) -> Value:
    """Product of all arguments."""
    return _arithmetic(args, "*")


def div(env: Environment, args: SExpression) -> Value:
    """Divide left-to-right, truncating; errors on division by zero."""
    return _arithmetic(args, "/")


def mod(env: Environment, args: SExpression) -> Value:
    """Remainder left-to-right; errors on modulo by zero."""
    return _arithmetic(args, "%")


# -------------------------------
# Comparison
# -------------------------------
_ORDERINGS: Mapping[str, Callable[[int, int], bool]] = MappingProxyType(
    {
        ">": operator.gt,
        "<": operator.lt,
        ">=": operator.ge,
        "<=": operator.le,
    }
)


def _order(args: SExpression, op: str) -> Value:
    if error := (
        _check_count(op, args, 2)
        or _check_type(op, args, 0, Number)
        or _check_type(op, args, 1, Number)
    ):
        return error
    return Number(int(_ORDERINGS[op](args[0].value, args[1].value)))


def gt(env: Environment, args: SExpression) -> Value:
    return _order(args, ">")


def lt(env: Environment, args: SExpression) -> Value:
    return _order(args, "<")


def ge(env: Environment, args: SExpression) -> Value:
    return _order(args, ">=")


def le(env: Environment, args: SExpression) -> Value:
    return _order(args, "<=")


def equals(env: Environment, args: SExpression) -> Value:
    """1 if both arguments are structurally equal, else 0."""
    if error := _check_count("==", args, 2):
        return error
    return Number(int(args[0] == args[1]))


def not_equals(env: Environment, args: SExpression) -> Value:
    """Logical negation of equals."""
    if error := _check_count("!=", args, 2):
        return error
    return Number(int(args[0] != args[1]))


# -------------------------------
# Conditionals
# -------------------------------
def if_builtin(env: Environment, args: SExpression) -> Value:
    """(if cond {then} {else}): only the selected branch is evaluated."""
    if error := (
        _check_count("if", args, 3)
        or _check_type("if", args, 0, Number)
        or _check_type("if", args, 1, QExpression)
        or _check_type("if", args, 2, QExpression)
    ):
        return error
    branch = args.pop(1 if args[0].value else 2)
    return evaluate(env, branch.as_sexpr())


# -------------------------------
# Variables and lambdas
# -------------------------------
def _var(env: Environment, args: SExpression, name: str) -> Value:
    if len(args) == 0:
        return Error(f"Function '{name}' expects at least 1 argument. Got 0.")
    if error := _check_type(name, args, 0, QExpression):
        return error

    symbols = args.pop(0)
    if len(symbols) != len(args):
        return Error(
            f"Function '{name}' passed incorrect number of values. "
            f"Got {len(args)}. Expected {len(symbols)}."
        )
    for sym in symbols:
        if not isinstance(sym, Symbol):
            return Error(
                f"Function '{name}' cannot define non-symbol. "
                f"Got '{sym.type_name}'. Expected 'Symbol'."
            )

    bind = env.define_global if name == "def" else env.put
    for sym, value in zip(symbols, args):
        bind(sym, value)
    return SExpression()


def def_builtin(env: Environment, args: SExpression) -> Value:
    """(def {a b} 1 2): bind each symbol in the root environment."""
    return _var(env, args, "def")


def put_builtin(env: Environment, args: SExpression) -> Value:
    """(= {a b} 1 2): bind each symbol in the current environment."""
    return _var(env, args, "=")


def lambda_builtin(env: Environment, args: SExpression) -> Value:
    """(\\ {formals} {body}) -> a Lambda with a fresh environment."""
    if error := (
        _check_count("\\", args, 2)
        or _check_type("\\", args, 0, QExpression)
        or _check_type("\\", args, 1, QExpression)
    ):
        return error
    for formal in args[0]:
        if not isinstance(formal, Symbol):
            return Error(
                f"Cannot define non-symbol. Got '{formal.type_name}'. Expected 'Symbol'."
            )

    formals = args.pop(0)
    body = args.pop(0)
    fn = Lambda(formals, body)
    owner = env.owner_of(body)
    if owner is not None:
        # Body written inside a running function: keep that scope as a lookup fallback
        fn.env.enclosing = owner.fork()
    logger.debug("Built lambda %s", fn)
    return fn


# -------------------------------
# Registration
# -------------------------------
BUILTINS: Mapping[str, BuiltinFn] = MappingProxyType(
    {
        "\\": lambda_builtin,
        "lambda": lambda_builtin,
        "def": def_builtin,
        "put": put_builtin,
        "=": put_builtin,
        "list": list_builtin,
        "head": head,
        "tail": tail,
        "join": join,
        "eval": eval_builtin,
        "add": add,
        "+": add,
        "sub": sub,
        "-": sub,
        "mul": mul,
        "*": mul,
        "div": div,
        "/": div,
        "mod": mod,
        "%": mod,
        "if": if_builtin,
        "==": equals,
        "eq": equals,
        "!=": not_equals,
        "ne": not_equals,
        ">": gt,
        "gt": gt,
        "<": lt,
        "lt": lt,
        ">=": ge,
        "ge": ge,
        "<=": le,
        "le": le,
    }
)


def register(env: Environment) -> None:
    """Register all builtin functions into the root of the given environment."""
    root = env.root()
    root.update({name: Builtin(name, fn) for name, fn in BUILTINS.items()})
    logger.debug("Registered %d builtins", len(BUILTINS))
