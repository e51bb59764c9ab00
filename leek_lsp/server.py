from __future__ import annotations

"""
A minimal pygls-based Language Server for Leek.

Features:
- Text synchronization (incremental) into a leek Workspace
- Diagnostics: parse errors, or one informational entry per declared variable
- Hover: description of the innermost syntax node under the cursor
- Completion: declared variables, defined functions, keywords
- Document Symbols: variable declarations

Note: We avoid evaluating the buffer. Every query reads the syntax tree of the
latest revision; a rejected edit keeps the last good state and is reported back
through window/logMessage.
"""

import argparse
import logging
from typing import List, Optional

from pygls.lsp.server import LanguageServer
from lsprotocol.types import (
    TEXT_DOCUMENT_COMPLETION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_CLOSE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_HOVER,
    CompletionItem,
    CompletionItemKind,
    CompletionList,
    CompletionOptions,
    CompletionParams,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    Diagnostic,
    DiagnosticSeverity,
    DocumentSymbol,
    DocumentSymbolParams,
    Hover,
    HoverParams,
    LogMessageParams,
    MarkupContent,
    MarkupKind,
    MessageType,
    Position,
    PublishDiagnosticsParams,
    Range,
    SymbolKind,
    TextDocumentSyncKind,
)

from leek import __version__, config
from leek import types as leek_types
from leek.document import TextChange
from leek.errors import UnknownDocumentError
from leek.logging_config import set_verbose_logging, setup_logger
from leek.workspace import Workspace

logger = logging.getLogger(__name__)

COMPLETION_KINDS = {
    "var": CompletionItemKind.Variable,
    "function": CompletionItemKind.Function,
    "keyword": CompletionItemKind.Keyword,
}


class LeekLanguageServer(LanguageServer):
    CMD_NAME = "leek-ls"

    def __init__(self):
        super().__init__(
            self.CMD_NAME,
            __version__,
            text_document_sync_kind=TextDocumentSyncKind.Incremental,
        )
        self.documents = Workspace()


ls = LeekLanguageServer()


# --- Conversions ---
def to_leek_position(pos: Position) -> leek_types.Position:
    return leek_types.Position(line=pos.line, character=pos.character)


def to_leek_range(rng: Range) -> leek_types.Range:
    return leek_types.Range(start=to_leek_position(rng.start), end=to_leek_position(rng.end))


def to_lsp_range(rng: leek_types.Range) -> Range:
    return Range(
        start=Position(line=rng.start.line, character=rng.start.character),
        end=Position(line=rng.end.line, character=rng.end.character),
    )


# --- Text sync ---
@ls.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(params: DidOpenTextDocumentParams):
    uri = params.text_document.uri
    ls.documents.open_document(uri, params.text_document.text or "")
    _publish_diagnostics(uri)


@ls.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(params: DidChangeTextDocumentParams):
    uri = params.text_document.uri
    for change in params.content_changes:
        # Whole-document changes carry no range
        rng = getattr(change, "range", None)
        text_change = TextChange(
            new_text=change.text,
            range=to_leek_range(rng) if rng is not None else None,
        )
        try:
            accepted = ls.documents.apply_change(uri, text_change)
        except UnknownDocumentError as err:
            logger.warning("change for unopened document: %s", err)
            return
        if not accepted:
            ls.window_log_message(
                LogMessageParams(
                    type=MessageType.Warning,
                    message=f"Ignored an edit outside the bounds of {uri}",
                )
            )
    _publish_diagnostics(uri)


@ls.feature(TEXT_DOCUMENT_DID_CLOSE)
def did_close(params: DidCloseTextDocumentParams):
    uri = params.text_document.uri
    ls.documents.close_document(uri)
    ls.text_document_publish_diagnostics(PublishDiagnosticsParams(uri=uri, diagnostics=[]))


# --- Diagnostics ---
def _publish_diagnostics(uri: str):
    diags: List[Diagnostic] = [
        Diagnostic(
            range=to_lsp_range(d.range),
            message=d.message,
            severity=DiagnosticSeverity(int(d.severity)),
            source=config.get_diagnostic_source(),
        )
        for d in ls.documents.query_diagnostics(uri)
    ]
    logger.debug("publishing %d diagnostics for %s", len(diags), uri)
    ls.text_document_publish_diagnostics(PublishDiagnosticsParams(uri=uri, diagnostics=diags))


# --- Hover ---
@ls.feature(TEXT_DOCUMENT_HOVER)
def on_hover(params: HoverParams) -> Optional[Hover]:
    uri = params.text_document.uri
    try:
        info = ls.documents.query_node_at(uri, to_leek_position(params.position))
    except UnknownDocumentError:
        return None
    if info is None:
        return None
    return Hover(
        contents=MarkupContent(kind=MarkupKind.PlainText, value=f"{info.description} ({info.kind})"),
        range=to_lsp_range(info.range),
    )


# --- Completion ---
@ls.feature(TEXT_DOCUMENT_COMPLETION, CompletionOptions(resolve_provider=False))
def on_completion(params: CompletionParams) -> CompletionList:
    uri = params.text_document.uri
    items: List[CompletionItem] = []
    try:
        candidates = ls.documents.query_completions(uri)
    except UnknownDocumentError:
        return CompletionList(is_incomplete=False, items=items)
    for cand in candidates:
        items.append(CompletionItem(label=cand.label, kind=COMPLETION_KINDS[cand.kind]))
    return CompletionList(is_incomplete=False, items=items)


# --- Document Symbols ---
@ls.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def on_document_symbols(params: DocumentSymbolParams) -> Optional[List[DocumentSymbol]]:
    uri = params.text_document.uri
    try:
        entries = ls.documents.query_declaration_ranges(uri)
    except UnknownDocumentError:
        return None
    return [
        DocumentSymbol(
            name=decl.name,
            kind=SymbolKind.Variable,
            range=to_lsp_range(rng),
            selection_range=to_lsp_range(name_rng),
        )
        for decl, rng, name_rng in entries
    ]


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog=LeekLanguageServer.CMD_NAME, description="Leek language server (stdio)")
    p.add_argument("--verbose", "-v", action="store_true", help="log at DEBUG regardless of LEEK_LOG_LEVEL")
    return p


def main(argv: Optional[List[str]] = None):
    args = build_argparser().parse_args(argv)
    setup_logger("leek")
    setup_logger("leek_lsp")
    set_verbose_logging(args.verbose)
    logger.info("starting %s %s over stdio", LeekLanguageServer.CMD_NAME, __version__)
    ls.start_io()


if __name__ == "__main__":
    # Run the language server over stdio
    main()
