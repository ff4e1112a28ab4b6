"""Runtime environment for Lispy.

The Environment stores bindings of symbol names to owned values and supports
nested scopes via an `outer` link. The outer environment is never owned: a
lambda's environment gets its `outer` assigned to the calling environment each
time the lambda is applied.

A call frame records the Q-expressions written literally in the body it is
running (`literals`). A lambda whose body is one of those literals remembers
a fork of the owning frame in `enclosing`. That scope is consulted only after
the whole `outer` chain has failed to resolve a name, so anything visible
through the caller's scope still wins. Bodies that arrive as arguments (the
prelude's `fun`) are not literals of any frame and capture nothing.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional

from lispy.types.symbol import Symbol
from lispy.types.value import Error, Value


class Environment:
    """Ordered mapping from symbol names to owned values, chained to a parent."""

    __slots__ = ("vars", "outer", "enclosing", "literals")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[str, Value] = {}
        self.outer: Environment | None = outer
        self.enclosing: Environment | None = None
        # id -> literal; holding the value keeps its id from being reused
        self.literals: dict[int, Value] = {}

    def root(self) -> Environment:
        env = self
        while env.outer is not None:
            env = env.outer
        return env

    def find(self, name: Symbol) -> Optional[Environment]:
        """Find the nearest environment in the chain that binds `name`."""
        env: Optional[Environment] = self
        while env is not None:
            if name.id in env.vars:
                return env
            env = env.outer
        return None

    def owner_of(self, literal: Value) -> Optional[Environment]:
        """The nearest frame on the chain whose running body contains `literal`."""
        env: Optional[Environment] = self
        while env is not None:
            if env.literals.get(id(literal)) is literal:
                return env
            env = env.outer
        return None

    def _resolve(self, name: Symbol) -> Optional[Value]:
        env = self.find(name)
        if env is not None:
            return env.vars[name.id]
        # Fall back to the defining scopes of any lambda frame on the chain
        env = self
        while env is not None:
            if env.enclosing is not None:
                value = env.enclosing._resolve(name)
                if value is not None:
                    return value
            env = env.outer
        return None

    def get(self, name: Symbol) -> Value:
        """Return a copy of the value bound to `name`, or an Error value."""
        value = self._resolve(name)
        if value is None:
            return Error(f"Unbound symbol '{name}'")
        return value.copy()

    def put(self, name: Symbol, value: Value) -> None:
        """Bind `name` in this frame, replacing any existing binding."""
        self.vars[name.id] = value.copy()

    def define_global(self, name: Symbol, value: Value) -> None:
        """Bind `name` in the root environment."""
        self.root().put(name, value)

    def fork(self) -> Environment:
        """Deep copy of this frame. The outer link is shared, not copied."""
        env = Environment(self.outer)
        env.vars = {k: v.copy() for k, v in self.vars.items()}
        env.enclosing = self.enclosing
        return env

    def update(self, mapping: dict[str, Value]) -> None:
        """Bulk-bind a mapping of name -> value in the current frame."""
        for k, v in mapping.items():
            self.vars[k] = v.copy()

    def __contains__(self, name: Symbol) -> bool:
        return self.find(name) is not None

    def _write_vars(self, buffer: StringIO) -> None:
        """Write this frame's variables into the buffer in a compact form."""
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v}" for k, v in self.vars.items()))
        buffer.write("}")

    def __str__(self) -> str:
        """Human-readable single-frame view with an indicator for parent."""
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")  # indicate parent exists
            return buffer.getvalue()

    def __repr__(self) -> str:
        """Detailed chain representation for debugging purposes."""
        chain = []
        env = self
        while env is not None:
            with StringIO() as buffer:
                env._write_vars(buffer)
                chain.append(buffer.getvalue())
            env = env.outer
        return f"<Environment chain: {' -> '.join(chain)}>"
