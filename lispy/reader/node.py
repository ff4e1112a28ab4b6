from __future__ import annotations

from dataclasses import dataclass, field
from io import StringIO


@dataclass
class AstNode:
    """Labeled parse tree node.

    `tag` encodes the grammar category as a `|`-separated path
    (e.g. ``expression|number|regex``); the root is tagged ``>``.
    Leaves carry their source text in `contents`.
    """

    tag: str
    contents: str = ""
    children: list[AstNode] = field(default_factory=list)
    line: int = 1
    column: int = 1

    def pretty(self, depth: int = 0) -> str:
        """Indented dump of the tree, one node per line."""
        with StringIO() as buffer:
            self._write(buffer, depth)
            return buffer.getvalue()

    def _write(self, buffer: StringIO, depth: int) -> None:
        buffer.write("  " * depth)
        buffer.write(self.tag)
        if self.contents:
            buffer.write(f": '{self.contents}'")
        buffer.write("\n")
        for child in self.children:
            child._write(buffer, depth + 1)
