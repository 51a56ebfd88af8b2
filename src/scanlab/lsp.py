"""Minimal LSP server for scanlab sources, diagnostics only."""

from __future__ import annotations

from lsprotocol.types import (
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    Position,
    PublishDiagnosticsParams,
    Range,
    TextDocumentSyncKind,
)
from pygls.lsp.server import LanguageServer

from scanlab.lexer import LexFailure, LexSuccess, tokenize
from scanlab.memory import HeapAllocator
from scanlab.tokens import position_at

server = LanguageServer("scanlab-lsp", "0.1.0", text_document_sync_kind=TextDocumentSyncKind.Full)


def _validate(ls: LanguageServer, uri: str) -> None:
    """Tokenize the document and publish diagnostics."""
    doc = ls.workspace.get_text_document(uri)
    source = doc.source.encode("utf-8")
    diagnostics: list[Diagnostic] = []

    result = tokenize(source, HeapAllocator())
    if isinstance(result, LexFailure):
        pos = position_at(source, result.offset)
        line = pos.line - 1
        # Columns are counted in decoded characters, not bytes
        line_start = result.offset - (pos.column - 1)
        col = len(source[line_start : result.offset].decode("utf-8", errors="replace"))
        diagnostics.append(
            Diagnostic(
                range=Range(
                    start=Position(line=line, character=col),
                    end=Position(line=line, character=col + 1),
                ),
                message=result.message,
                severity=DiagnosticSeverity.Error,
                source="scanlab",
            )
        )
    elif isinstance(result, LexSuccess):
        result.release()

    ls.text_document_publish_diagnostics(
        PublishDiagnosticsParams(uri=uri, diagnostics=diagnostics)
    )


@server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: LanguageServer, params: DidOpenTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


@server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: LanguageServer, params: DidChangeTextDocumentParams) -> None:
    _validate(ls, params.text_document.uri)


def main() -> None:
    server.start_io()
