"""
  Lispy Lexer and Parser

- Regex lexer, recursive-descent parser
- Emits a labeled parse tree (AstNode) rather than values; lispy.reader.reader
  turns that tree into S-/Q-expressions.

Grammar:

    number      : /-?[0-9]+/ ;
    symbol      : /[a-zA-Z0-9_+\\-*\\/\\\\=<>!&%]+/ ;
    qexpression : '{' <expression>* '}' ;
    sexpression : '(' <expression>* ')' ;
    expression  : <number> | <symbol> | <sexpression> | <qexpression> ;
    lispy       : /^/ <expression>* /$/ ;

`number` is tried before `symbol`, so ``-5`` is a number and ``-`` a symbol.
``;`` starts a comment that runs to the end of the line.
"""

from __future__ import annotations

import re
from typing import Iterator, NamedTuple, Optional

from lispy.errors import LispySyntaxError
from lispy.reader.node import AstNode


TOKEN_RE = re.compile(
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<whitespace>\s+)"
    r"|(?P<lparen>\()"  # (
    r"|(?P<rparen>\))"  # )
    r"|(?P<lbrace>\{)"  # {
    r"|(?P<rbrace>\})"  # }
    r"|(?P<number>-?[0-9]+)"
    r"|(?P<symbol>[a-zA-Z0-9_+\-*/\\=<>!&%]+)"
)

_CLOSERS = {"lparen": "rparen", "lbrace": "rbrace"}
_GROUPS = {"lparen": "sexpression", "lbrace": "qexpression"}


class Token(NamedTuple):
    kind: str
    text: str
    line: int
    column: int


def lex(source: str, filename: str = "<stdin>") -> Iterator[Token]:
    """Token generator; whitespace and comments are dropped."""
    pos = 0
    line = 1
    line_start = 0
    n = len(source)

    while pos < n:
        m = TOKEN_RE.match(source, pos)
        if not m:
            raise LispySyntaxError(
                f"unexpected character {source[pos]!r}", line, pos - line_start + 1, filename
            )
        kind = m.lastgroup
        text = m.group(kind)
        if kind not in ("comment", "whitespace"):
            yield Token(kind, text, line, pos - line_start + 1)
        newlines = text.count("\n")
        if newlines:
            line += newlines
            line_start = pos + text.rindex("\n") + 1
        pos = m.end()


def end_position(source: str) -> tuple[int, int]:
    """1-based (line, column) just past the end of `source`."""
    line = source.count("\n") + 1
    return line, len(source) - (source.rfind("\n") + 1) + 1


class TokenStream:
    def __init__(self, tokens: Iterator[Token], filename: str = "<stdin>", end: tuple[int, int] = (1, 1)):
        self.tokens = iter(tokens)
        self.buffer: list[Token] = []
        self.filename = filename
        self.end = end

    def peek(self) -> Optional[Token]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None
        return self.buffer[0]

    def advance(self) -> Optional[Token]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, None)

    def _error(self, message: str, token: Optional[Token] = None) -> LispySyntaxError:
        line, column = (token.line, token.column) if token is not None else self.end
        return LispySyntaxError(message, line, column, self.filename)

    def parse_expr(self) -> AstNode:
        tok = self.peek()
        if tok is None:
            raise self._error("expected expression before end of input")

        if tok.kind in ("number", "symbol"):
            self.advance()
            return AstNode(f"expression|{tok.kind}|regex", tok.text, [], tok.line, tok.column)

        if tok.kind in _GROUPS:
            return self._parse_group(tok)

        raise self._error(f"unexpected '{tok.text}'", tok)

    def _parse_group(self, open_tok: Token) -> AstNode:
        self.advance()
        node = AstNode(
            f"expression|{_GROUPS[open_tok.kind]}|>",
            "",
            [AstNode("char", open_tok.text, [], open_tok.line, open_tok.column)],
            open_tok.line,
            open_tok.column,
        )
        closer = _CLOSERS[open_tok.kind]
        while True:
            tok = self.peek()
            if tok is None:
                raise self._error(
                    f"unmatched '{open_tok.text}' opened at {open_tok.line}:{open_tok.column}"
                )
            if tok.kind == closer:
                self.advance()
                node.children.append(AstNode("char", tok.text, [], tok.line, tok.column))
                return node
            node.children.append(self.parse_expr())

    def parse_all(self) -> Iterator[AstNode]:
        while self.peek() is not None:
            yield self.parse_expr()


def parse_expressions(source: str, filename: str = "<stdin>") -> Iterator[AstNode]:
    """Yield each top-level expression node of `source`."""
    stream = TokenStream(lex(source, filename), filename, end_position(source))
    yield from stream.parse_all()


def parse(source: str, filename: str = "<stdin>") -> AstNode:
    """Parse a whole input into a root node tagged ``>``.

    Raises LispySyntaxError on malformed input.
    """
    line, column = end_position(source)
    children = [AstNode("regex", "", [], 1, 1)]
    children.extend(parse_expressions(source, filename))
    children.append(AstNode("regex", "", [], line, column))
    return AstNode(">", "", children, 1, 1)
