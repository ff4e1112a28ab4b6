"""Runtime value model for Lispy.

Every datum the evaluator touches is one of a closed set of variants:
Number, Error, Symbol, SExpression, QExpression and Function (Builtin or
Lambda). Code and data share this representation.

Ownership rules:
- A value stored into an expression or an environment is owned by it. Handing
  a value across such a boundary goes through ``copy()``.
- Atoms (Number, Error, Symbol, Builtin) are immutable, so their copy is the
  object itself. Expressions copy recursively; lambdas fork their environment.
- ``pop`` and ``take`` move a child out of an expression without copying.
"""

from __future__ import annotations

from io import StringIO
from typing import Callable, ClassVar, Iterable, Iterator, TYPE_CHECKING

if TYPE_CHECKING:
    from lispy.types.environment import Environment


class Value:
    """Base class of all runtime values."""

    __slots__ = ()

    type_name: ClassVar[str] = "Unknown"

    def copy(self) -> Value:
        return self

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"


class Number(Value):
    __slots__ = ("value",)

    type_name = "Number"

    def __init__(self, value: int):
        self.value: int = value

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Number) and self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __bool__(self) -> bool:
        return self.value != 0

    def __str__(self) -> str:
        return str(self.value)


class Error(Value):
    """A first-class error. Produced instead of raising; propagates as data."""

    __slots__ = ("message",)

    type_name = "Error"

    def __init__(self, message: str):
        self.message: str = message

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Error) and self.message == other.message

    def __hash__(self) -> int:
        return hash(self.message)

    def __str__(self) -> str:
        return f"Error: {self.message}"


class Expression(Value):
    """Ordered, owning sequence of values. Base of S- and Q-expressions."""

    __slots__ = ("cells",)

    open_char: ClassVar[str] = "("
    close_char: ClassVar[str] = ")"

    def __init__(self, cells: Iterable[Value] | None = None):
        self.cells: list[Value] = list(cells) if cells is not None else []

    # --- Ownership helpers ---
    def add(self, value: Value) -> Expression:
        """Append `value` (already owned by the caller) and return self."""
        self.cells.append(value)
        return self

    def pop(self, i: int = 0) -> Value:
        """Move the i-th child out, shrinking this expression."""
        return self.cells.pop(i)

    def take(self, i: int = 0) -> Value:
        """Move the i-th child out and discard the rest of this expression."""
        value = self.cells.pop(i)
        self.cells.clear()
        return value

    def copy(self) -> Expression:
        return type(self)(cell.copy() for cell in self.cells)

    # --- Retagging: the cells move to the new expression ---
    def as_sexpr(self) -> SExpression:
        return SExpression._adopt(self.cells)

    def as_qexpr(self) -> QExpression:
        return QExpression._adopt(self.cells)

    @classmethod
    def _adopt(cls, cells: list[Value]) -> Expression:
        expr = cls()
        expr.cells = cells
        return expr

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self) -> Iterator[Value]:
        return iter(self.cells)

    def __getitem__(self, i: int) -> Value:
        return self.cells[i]

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return False
        if len(self.cells) != len(other.cells):
            return False
        return all(a == b for a, b in zip(self.cells, other.cells))

    __hash__ = None

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write(self.open_char)
            buffer.write(" ".join(str(cell) for cell in self.cells))
            buffer.write(self.close_char)
            return buffer.getvalue()


class SExpression(Expression):
    __slots__ = ()

    type_name = "S-Expression"


class QExpression(Expression):
    __slots__ = ()

    type_name = "Q-Expression"
    open_char = "{"
    close_char = "}"


class Function(Value):
    """Common base of callables: native builtins and user lambdas."""

    __slots__ = ()

    type_name = "Function"


# Native operation: (environment, owned argument expression) -> result value
BuiltinFn = Callable[["Environment", SExpression], Value]


class Builtin(Function):
    """Opaque native operation. Equality is identity of the Python callable."""

    __slots__ = ("name", "fn")

    def __init__(self, name: str, fn: BuiltinFn):
        self.name = name
        self.fn = fn

    def __call__(self, env: Environment, args: SExpression) -> Value:
        return self.fn(env, args)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Builtin) and self.fn is other.fn

    def __hash__(self) -> int:
        return id(self.fn)

    def __str__(self) -> str:
        return "<builtin>"

    def __repr__(self) -> str:
        return f"Builtin({self.name!r})"
