from __future__ import annotations
import logging
from pathlib import Path
from typing import Protocol

from lispy.config import get_prelude_root
from lispy.errors import LispyLoadError

logger = logging.getLogger(__name__)


class _HasEvalPrelude(Protocol):
    def eval_prelude(self, code: str, filename: str = ...) -> None: ...


def prelude_files() -> list[Path]:
    root = get_prelude_root()
    return [root / 'std' / 'core.lspy']


# Prelude convenience loader (std.core)

def load_prelude(itp: _HasEvalPrelude) -> None:
    for path in prelude_files():
        if not path.is_file():
            raise LispyLoadError(f"Cannot find prelude '{path}' (check LISPY_PRELUDE_PATH)")
        logger.debug("Loading prelude %s", path)
        itp.eval_prelude(path.read_text(encoding='utf-8'), filename=str(path))
