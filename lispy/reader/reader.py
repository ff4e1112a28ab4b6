"""Tree reader: labeled parse tree -> Lispy values."""

from __future__ import annotations

from lispy.reader.node import AstNode
from lispy.types.symbol import Symbol
from lispy.types.value import Error, Expression, Number, QExpression, SExpression, Value

# Numbers are native machine integers: literals must fit a signed 64-bit long
INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 63 - 1

_DELIMITERS = frozenset({"(", ")", "{", "}"})


def read_number(node: AstNode) -> Value:
    try:
        x = int(node.contents, 10)
    except ValueError:
        return Error("Invalid number.")
    if not INT_MIN <= x <= INT_MAX:
        return Error("Invalid number.")
    return Number(x)


def _is_structural(node: AstNode) -> bool:
    return (
        node.contents in _DELIMITERS
        or node.tag == "regex"
        or (node.contents != "" and node.contents.isspace())
    )


def read(node: AstNode) -> Value:
    """Convert `node` (and its children, recursively) into a fresh value."""
    if "number" in node.tag:
        return read_number(node)
    if "symbol" in node.tag:
        return Symbol(node.contents)

    x: Expression
    if node.tag == ">":
        x = SExpression()
    elif "qexpression" in node.tag:
        x = QExpression()
    elif "sexpression" in node.tag:
        x = SExpression()
    else:
        return Error(f"Unknown node '{node.tag}'.")

    for child in node.children:
        if _is_structural(child):
            continue
        x.add(read(child))
    return x
