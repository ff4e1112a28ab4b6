import pytest

from lispy.interpreter import Interpreter


@pytest.fixture
def interp():
    """Interpreter with builtins only, no prelude."""
    return Interpreter(prelude=None)


@pytest.fixture
def run(interp):
    """Evaluate each top-level expression and return the printed last result."""

    def _run(code: str) -> str:
        return str(interp.eval_all(code)[-1])

    return _run
