"""
Lispy command line: run scripts and/or start the interactive REPL.

Usage:
    python -m lispy                    # REPL
    python -m lispy FILE ...           # evaluate files, print each result
    python -m lispy -i FILE            # evaluate FILE, then start the REPL
"""

from __future__ import annotations

import argparse
import atexit
import logging
import sys
from typing import Callable, Optional, Sequence

from lispy.config import get_history_file, get_log_level, get_prompt, get_recursion_limit
from lispy.debug_utils.pprint import colorize, to_string
from lispy.errors import LispyLoadError, LispySyntaxError
from lispy.interpreter import Interpreter
from lispy.reader.parser import parse

# Readline support for history
try:
    import readline
    READLINE_AVAILABLE = True
except ImportError:
    READLINE_AVAILABLE = False

logger = logging.getLogger("lispy")

BANNER = "Lispy Version 00.00.09\nPress Ctrl+c to Exit\n"


def create_arg_parser() -> argparse.ArgumentParser:
    """Create command line argument parser"""
    parser = argparse.ArgumentParser(
        prog="lispy",
        description="Lispy: a small Lisp with S-expressions and Q-expressions",
    )
    parser.add_argument("files", nargs="*", help="Lispy source files to evaluate")
    parser.add_argument(
        "-i", "--interactive", action="store_true",
        help="Start the REPL after evaluating files",
    )
    parser.add_argument(
        "--no-prelude", action="store_true",
        help="Do not load the standard prelude",
    )
    parser.add_argument(
        "--no-color", action="store_true",
        help="Disable ANSI colors in printed results",
    )
    parser.add_argument(
        "--ast", action="store_true",
        help="Print the parse tree of each REPL input before its result",
    )
    parser.add_argument(
        "--log-level", default=None,
        help="Logging level (default: $LISPY_LOG_LEVEL or WARNING)",
    )
    return parser


def configure_logging(level: Optional[str]) -> None:
    logging.basicConfig(
        level=(level or get_log_level()).upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )


def setup_readline() -> None:
    """Setup readline with a persistent history file"""
    if not READLINE_AVAILABLE:
        return
    history_file = get_history_file()
    try:
        readline.read_history_file(str(history_file))
    except OSError:
        pass  # First run: no history yet
    readline.set_history_length(1000)

    def save_history() -> None:
        try:
            readline.write_history_file(str(history_file))
        except OSError as ex:
            logger.debug("Could not save history: %s", ex)

    atexit.register(save_history)


def run_files(interp: Interpreter, files: Sequence[str], show: Callable) -> int:
    for path in files:
        try:
            for result in interp.load(path):
                print(show(result))
        except (LispySyntaxError, LispyLoadError) as ex:
            logger.error("%s", ex)
            return 1
    return 0


def run_repl(interp: Interpreter, show: Callable, show_tree: bool = False) -> None:
    print(BANNER)
    setup_readline()
    prompt = get_prompt()
    while True:
        try:
            line = input(prompt)
        except (EOFError, KeyboardInterrupt):
            print()
            break
        try:
            if show_tree:
                print(parse(line).pretty(), end="")
            result = interp.eval(line)
        except LispySyntaxError as ex:
            print(ex)
            continue
        print(show(result))


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = create_arg_parser().parse_args(argv)
    configure_logging(args.log_level)
    sys.setrecursionlimit(max(sys.getrecursionlimit(), get_recursion_limit()))

    use_color = not args.no_color and sys.stdout.isatty()
    show = colorize if use_color else to_string

    interp = Interpreter(prelude=None if args.no_prelude else "auto")
    rc = run_files(interp, args.files, show)
    if rc == 0 and (args.interactive or not args.files):
        run_repl(interp, show, show_tree=args.ast)
    return rc


if __name__ == "__main__":
    sys.exit(main())
