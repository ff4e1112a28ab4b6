from lispy.types.value import (
    Value,
    Number,
    Error,
    Expression,
    SExpression,
    QExpression,
    Function,
    Builtin,
    BuiltinFn,
)
from lispy.types.symbol import Symbol, VARIADIC
from lispy.types.environment import Environment
from lispy.types.lambda_fn import Lambda

__all__ = [
    "Value",
    "Number",
    "Error",
    "Symbol",
    "VARIADIC",
    "Expression",
    "SExpression",
    "QExpression",
    "Function",
    "Builtin",
    "BuiltinFn",
    "Lambda",
    "Environment",
]
