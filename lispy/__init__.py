# Core package metadata for Lispy.
# Runtime values (code and data alike) are instances of the classes in
# lispy.types; there is no separate AST type once a parse tree has been read.

from typing import Any, Callable

__version__ = "0.9.0"

# Evaluator function type: passed into the application engine so closures can
# evaluate their bodies without a circular import.
EvaluatorFn = Callable[..., Any]
