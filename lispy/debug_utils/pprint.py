from lispy.types.lambda_fn import Lambda
from lispy.types.symbol import Symbol
from lispy.types.value import Builtin, Error, Expression, Number, Value

# ----------------- ANSI colors -----------------
RESET = "\033[0m"
COLOR_SYMBOL = "\033[94m"
COLOR_LAMBDA = "\033[92m"
COLOR_BUILTIN = "\033[95m"
COLOR_NUMBER = "\033[96m"
COLOR_ERROR = "\033[91m"

# ----------------- Defaults -----------------
DEFAULT_OPTIONS = {
    "color_symbols": True,
    "color_lambda": True,
    "color_builtins": True,
    "color_numbers": False,
    "color_errors": True,
}


def to_string(value: Value) -> str:
    """Plain printed form of a value, as the REPL shows it without colors."""
    return str(value)


# ----------------- Colorize utility -----------------
def colorize(value: Value, options: dict = DEFAULT_OPTIONS) -> str:
    if isinstance(value, Error) and options.get("color_errors", True):
        return f"{COLOR_ERROR}{value}{RESET}"
    if isinstance(value, Symbol) and options.get("color_symbols", True):
        return f"{COLOR_SYMBOL}{value}{RESET}"
    if isinstance(value, Number) and options.get("color_numbers", False):
        return f"{COLOR_NUMBER}{value}{RESET}"
    if isinstance(value, Builtin) and options.get("color_builtins", True):
        return f"{COLOR_BUILTIN}{value}{RESET}"
    if isinstance(value, Lambda) and options.get("color_lambda", True):
        return (
            f"{COLOR_LAMBDA}(\\{RESET} "
            f"{colorize(value.formals, options)} {colorize(value.body, options)}"
            f"{COLOR_LAMBDA}){RESET}"
        )
    if isinstance(value, Expression):
        inner = " ".join(colorize(cell, options) for cell in value.cells)
        return f"{value.open_char}{inner}{value.close_char}"
    return str(value)
