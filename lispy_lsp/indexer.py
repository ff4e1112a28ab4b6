"""
Lightweight indexer for Lispy files without evaluating code.

We scan top-level forms and build an index for:
- definitions: (def {name ...} ...), (= {name ...} ...), (fun {name args...} {...})
- the first syntax error, if any, for diagnostics

The index is built with the real Lispy parser. Parsing stops at the first
syntax error; definitions found before it are kept so that completion keeps
working on partial buffers.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from lispy.builtin.env_builtin import BUILTINS
from lispy.errors import LispySyntaxError
from lispy.reader.node import AstNode
from lispy.reader.parser import parse_expressions


@dataclass
class SymbolDef:
    name: str
    kind: str  # "var" | "function"
    line: int  # 0-based
    col: int  # 0-based


@dataclass
class DocumentIndex:
    symbols: Dict[str, SymbolDef] = field(default_factory=dict)
    syntax_error: Optional[LispySyntaxError] = None


def _items(node: AstNode) -> List[AstNode]:
    """Expression children of a group node, without delimiters."""
    return [c for c in node.children if c.tag != "char"]


def _is_lambda(node: AstNode) -> bool:
    if "sexpression" not in node.tag:
        return False
    items = _items(node)
    return bool(items) and "symbol" in items[0].tag and items[0].contents in ("\\", "lambda")


def _index_form(idx: DocumentIndex, node: AstNode) -> None:
    if "sexpression" not in node.tag:
        return
    items = _items(node)
    if len(items) < 2 or "symbol" not in items[0].tag or "qexpression" not in items[1].tag:
        return
    head = items[0].contents
    names = [n for n in _items(items[1]) if "symbol" in n.tag]

    if head == "fun":
        # (fun {name args...} {body}): only the first symbol is defined
        if names:
            n = names[0]
            idx.symbols[n.contents] = SymbolDef(n.contents, "function", n.line - 1, n.column - 1)
    elif head in ("def", "=", "put"):
        values = items[2:]
        for i, n in enumerate(names):
            kind = "function" if i < len(values) and _is_lambda(values[i]) else "var"
            idx.symbols[n.contents] = SymbolDef(n.contents, kind, n.line - 1, n.column - 1)


def build_index(text: str) -> DocumentIndex:
    idx = DocumentIndex()
    try:
        for node in parse_expressions(text, filename="<buffer>"):
            _index_form(idx, node)
    except LispySyntaxError as ex:
        idx.syntax_error = ex
    return idx


# Builtin signatures for quick hover/signature help without eval
_SIGNATURES: Dict[str, str] = {
    "list": "(list & xs)",
    "head": "(head {xs})",
    "tail": "(tail {xs})",
    "join": "(join {xs} & more)",
    "eval": "(eval {expr})",
    "+": "(+ n & ns)",
    "-": "(- n & ns)",
    "*": "(* n & ns)",
    "/": "(/ n & ns)",
    "%": "(% n & ns)",
    "\\": "(\\ {formals} {body})",
    "def": "(def {names} & values)",
    "=": "(= {names} & values)",
    "if": "(if cond {then} {else})",
    "==": "(== a b)",
    "!=": "(!= a b)",
    ">": "(> a b)",
    "<": "(< a b)",
    ">=": "(>= a b)",
    "<=": "(<= a b)",
}

_ALIASES = {
    "add": "+", "sub": "-", "mul": "*", "div": "/", "mod": "%",
    "lambda": "\\", "put": "=", "eq": "==", "ne": "!=",
    "gt": ">", "lt": "<", "ge": ">=", "le": "<=",
}


def _signature(name: str) -> str:
    canonical = _ALIASES.get(name, name)
    sig = _SIGNATURES.get(canonical, f"({name} ...)")
    return sig.replace(f"({canonical}", f"({name}", 1)


BUILTIN_SIGNATURES: Dict[str, str] = {name: _signature(name) for name in BUILTINS}
