from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

from lispy.builtin.env_builtin import register
from lispy.errors import LispyLoadError
from lispy.evaluation.evaluator import evaluate
from lispy.reader.parser import parse, parse_expressions
from lispy.reader.reader import read
from lispy.types.environment import Environment
from lispy.types.value import Error, Value

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Orchestrates reading and evaluating Lispy code.
    Maintains the root Environment (with builtins registered) across calls.
    """

    def __init__(self, prelude: str | None | Literal['auto'] = 'auto'):
        self.env: Environment = Environment()
        register(self.env)

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            # Lazy import to avoid circular imports
            from lispy.modules.prelude_loader import load_prelude
            try:
                load_prelude(self)
            except LispyLoadError as ex:
                # Be permissive: no prelude found -> proceed with builtins only
                logger.warning("%s", ex)
        elif prelude:
            self.eval_prelude(prelude)

    def _evaluate(self, expr: Value) -> Value:
        try:
            return evaluate(self.env, expr)
        except RecursionError:
            logger.error("Evaluation exceeded the host recursion limit")
            return Error("Maximum recursion depth exceeded.")

    def eval_prelude(self, code: str, filename: str = "<prelude>") -> None:
        for result in self.eval_all(code, filename):
            if isinstance(result, Error):
                logger.warning("%s: %s", filename, result)

    def eval(self, code: str) -> Value:
        """Evaluate a whole input line as one S-expression, as the REPL does.

        Raises LispySyntaxError on malformed input.
        """
        return self._evaluate(read(parse(code)))

    def eval_all(self, code: str, filename: str = "<stdin>") -> list[Value]:
        """Evaluate each top-level expression of `code` in order."""
        nodes = list(parse_expressions(code, filename))
        return [self._evaluate(read(node)) for node in nodes]

    def load(self, path: str | Path) -> list[Value]:
        p = Path(path)
        if not p.is_file():
            raise LispyLoadError(f"Cannot find file '{p}'")
        logger.debug("Loading %s", p)
        return self.eval_all(p.read_text(encoding='utf-8'), filename=str(p))
