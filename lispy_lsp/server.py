"""
pygls Language Server for Lispy (`lispy-ls`).

Buffers are never evaluated: each open document is re-indexed on change and
the handlers answer from that static index.

- diagnostics: the first syntax error raised by the Lispy parser
- hover: signature of a builtin, or where a top-level name is defined
- completion: builtins plus the document's own definitions
- document symbols: the document's definitions
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from lsprotocol.types import (
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    DocumentSymbol,
    DocumentSymbolParams,
    Hover,
    HoverParams,
    MarkupContent,
    MarkupKind,
    Position,
    Range,
    SymbolKind,
)
from pygls.server import LanguageServer

from lispy import __version__
from lispy_lsp.indexer import BUILTIN_SIGNATURES, DocumentIndex, SymbolDef, build_index

# Characters that end a symbol token
_DELIMITERS = frozenset(" \t\r\n(){};")


@dataclass
class OpenDocument:
    text: str
    index: DocumentIndex

    @classmethod
    def from_text(cls, text: str) -> OpenDocument:
        return cls(text, build_index(text))


class LispyLanguageServer(LanguageServer):
    CMD_NAME = "lispy-ls"

    def __init__(self):
        super().__init__(self.CMD_NAME, __version__)
        self.open_documents: Dict[str, OpenDocument] = {}

    def refresh(self, uri: str, text: str) -> None:
        doc = OpenDocument.from_text(text)
        self.open_documents[uri] = doc
        self.publish_diagnostics(uri, diagnostics_for(doc.index))

    def forget(self, uri: str) -> None:
        self.open_documents.pop(uri, None)
        self.publish_diagnostics(uri, [])


# -------------------------------
# Answers computed from an index
# -------------------------------
def diagnostics_for(idx: DocumentIndex) -> List[Diagnostic]:
    err = idx.syntax_error
    if err is None:
        return []
    start = Position(line=err.line - 1, character=err.column - 1)
    end = Position(line=start.line, character=start.character + 1)
    return [
        Diagnostic(
            range=Range(start=start, end=end),
            message=err.message,
            severity=DiagnosticSeverity.Error,
            source=LispyLanguageServer.CMD_NAME,
        )
    ]


def describe(word: str, idx: DocumentIndex) -> Optional[str]:
    """Hover text for `word`; user definitions shadow builtins."""
    sdef = idx.symbols.get(word)
    if sdef is not None:
        return f"{word} ({sdef.kind}, defined at {sdef.line + 1}:{sdef.col + 1})"
    return BUILTIN_SIGNATURES.get(word)


def completion_items(idx: Optional[DocumentIndex]) -> List[CompletionItem]:
    items = [
        CompletionItem(label=name, kind=CompletionItemKind.Function, detail=sig)
        for name, sig in BUILTIN_SIGNATURES.items()
    ]
    if idx is not None:
        items.extend(
            CompletionItem(
                label=name,
                kind=CompletionItemKind.Function if sdef.kind == "function" else CompletionItemKind.Variable,
            )
            for name, sdef in idx.symbols.items()
        )
    return items


def _document_symbol(sdef: SymbolDef) -> DocumentSymbol:
    span = Range(
        start=Position(line=sdef.line, character=sdef.col),
        end=Position(line=sdef.line, character=sdef.col + len(sdef.name)),
    )
    kind = SymbolKind.Function if sdef.kind == "function" else SymbolKind.Variable
    return DocumentSymbol(name=sdef.name, kind=kind, range=span, selection_range=span)


def document_symbols(idx: DocumentIndex) -> List[DocumentSymbol]:
    return [_document_symbol(sdef) for sdef in idx.symbols.values()]


def extract_word_at(text: str, pos: Position) -> Optional[str]:
    lines = text.splitlines(True)
    if pos.line >= len(lines):
        return None
    line = lines[pos.line]
    start = end = min(pos.character, len(line))
    while start > 0 and line[start - 1] not in _DELIMITERS:
        start -= 1
    while end < len(line) and line[end] not in _DELIMITERS:
        end += 1
    return line[start:end] or None


# -------------------------------
# Protocol handlers
# -------------------------------
ls = LispyLanguageServer()


@ls.feature("textDocument/didOpen")
def did_open(params: DidOpenTextDocumentParams):
    ls.refresh(params.text_document.uri, params.text_document.text or "")


@ls.feature("textDocument/didChange")
def did_change(params: DidChangeTextDocumentParams):
    uri = params.text_document.uri
    if params.content_changes:
        # Full sync: the last change holds the whole text
        text = params.content_changes[-1].text
    else:
        doc = ls.open_documents.get(uri)
        text = doc.text if doc is not None else ""
    ls.refresh(uri, text)


@ls.feature("textDocument/didClose")
def did_close(params: DidCloseTextDocumentParams):
    ls.forget(params.text_document.uri)


@ls.feature("textDocument/hover")
def on_hover(params: HoverParams) -> Optional[Hover]:
    doc = ls.open_documents.get(params.text_document.uri)
    if doc is None:
        return None
    word = extract_word_at(doc.text, params.position)
    text = describe(word, doc.index) if word else None
    if text is None:
        return None
    return Hover(contents=MarkupContent(kind=MarkupKind.PlainText, value=text))


@ls.feature("textDocument/completion", CompletionOptions(trigger_characters=["(", "{"]))
def on_completion(params: CompletionParams) -> CompletionList:
    doc = ls.open_documents.get(params.text_document.uri)
    return CompletionList(is_incomplete=False, items=completion_items(doc.index if doc else None))


@ls.feature("textDocument/documentSymbol")
def on_document_symbols(params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    doc = ls.open_documents.get(params.text_document.uri)
    if doc is None:
        return None
    return document_symbols(doc.index)


def main() -> None:
    ls.start_io()


if __name__ == "__main__":
    main()
