"""Lambda function representation for Lispy."""

from __future__ import annotations

from io import StringIO

from lispy.types.environment import Environment
from lispy.types.value import Function, QExpression


class Lambda(Function):
    """A user-defined function with formal parameters, body, and private env.

    The environment starts out empty and unparented. Partial application binds
    formals into it (consuming them from `formals`); a full application points
    its `outer` at the calling environment before the body is evaluated.
    """

    __slots__ = ("formals", "body", "env")

    def __init__(
        self, formals: QExpression, body: QExpression, env: Environment | None = None
    ):
        self.formals: QExpression = formals
        self.body: QExpression = body
        # Avoid shared default Environment across instances
        self.env: Environment = env if env is not None else Environment()

    def copy(self) -> Lambda:
        return Lambda(self.formals.copy(), self.body.copy(), self.env.fork())

    def __eq__(self, other: object) -> bool:
        # Captured environments are deliberately not compared
        return (
            isinstance(other, Lambda)
            and self.formals == other.formals
            and self.body == other.body
        )

    __hash__ = None

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("(\\ ")
            buffer.write(str(self.formals))
            buffer.write(" ")
            buffer.write(str(self.body))
            buffer.write(")")
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Return the Lisp-style representation of the lambda."""
        return str(self)
