class LispyError(Exception):
    """ Base class for all host-level Lispy errors"""
    pass


class LispySyntaxError(LispyError):
    """ Raised when source text does not match the grammar"""

    def __init__(self, message: str, line: int = 1, column: int = 1, filename: str = "<stdin>"):
        super().__init__(f"{filename}:{line}:{column}: error: {message}")
        self.message = message
        self.line = line
        self.column = column
        self.filename = filename


class LispyLoadError(LispyError):
    """ Raised when a prelude or script file cannot be found"""

# Language-level failures are not exceptions: they are lispy.types.value.Error
# values returned by the evaluator and builtins.
