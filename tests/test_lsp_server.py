import logging

import pytest
from lsprotocol.types import (
    CompletionItemKind,
    CompletionParams,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidCloseTextDocumentParams,
    DidOpenTextDocumentParams,
    DocumentSymbolParams,
    HoverParams,
    MessageType,
    Position,
    Range,
    SymbolKind,
    TextDocumentContentChangePartial,
    TextDocumentContentChangeWholeDocument,
    TextDocumentIdentifier,
    TextDocumentItem,
    VersionedTextDocumentIdentifier,
)

URI = "file:///sample.leek"


def _open(lsp, text):
    lsp.module.did_open(
        DidOpenTextDocumentParams(
            text_document=TextDocumentItem(uri=URI, language_id="leek", version=1, text=text)
        )
    )


def _change(lsp, *changes, version=2):
    lsp.module.did_change(
        DidChangeTextDocumentParams(
            text_document=VersionedTextDocumentIdentifier(uri=URI, version=version),
            content_changes=list(changes),
        )
    )


def _pos(line, character):
    return Position(line=line, character=character)


def test_did_open_publishes_declaration_diagnostics(lsp, sample_source):
    _open(lsp, sample_source)
    diags = lsp.published[URI]
    assert [d.message for d in diags] == ["found variable 'a'", "found variable 'b'"]
    assert all(d.severity == DiagnosticSeverity.Information for d in diags)
    assert diags[0].source == "leek-ls"
    assert diags[0].range == Range(start=_pos(0, 0), end=_pos(0, 10))


def test_incremental_change(lsp, sample_source):
    _open(lsp, sample_source)
    _change(lsp, TextDocumentContentChangePartial(range=Range(start=_pos(0, 8), end=_pos(0, 9)), text="30"))
    assert lsp.module.ls.documents.text_of(URI).startswith("var a = 30;")
    assert lsp.published[URI][1].range == Range(start=_pos(1, 0), end=_pos(1, 10))


def test_whole_document_change_with_error(lsp, sample_source):
    _open(lsp, sample_source)
    _change(lsp, TextDocumentContentChangeWholeDocument(text="if (1 print(a); }"))
    (diag,) = lsp.published[URI]
    assert diag.severity == DiagnosticSeverity.Error
    assert diag.message == "expected ')'"
    assert diag.range.start == _pos(0, 6)


def test_out_of_range_change_logs_warning(lsp, sample_source):
    _open(lsp, sample_source)
    _change(lsp, TextDocumentContentChangePartial(range=Range(start=_pos(30, 0), end=_pos(30, 1)), text="x"))
    assert lsp.module.ls.documents.text_of(URI) == sample_source
    (msg,) = lsp.log_messages
    assert msg.type == MessageType.Warning
    assert URI in msg.message


def test_change_for_unopened_document_is_ignored(lsp):
    _change(lsp, TextDocumentContentChangeWholeDocument(text="var a = 1;"))
    assert URI not in lsp.published


def test_hover(lsp, sample_source):
    _open(lsp, sample_source)
    hover = lsp.module.on_hover(
        HoverParams(text_document=TextDocumentIdentifier(uri=URI), position=_pos(2, 15))
    )
    assert hover.contents.value == "variable 'a' (Var)"
    assert hover.range == Range(start=_pos(2, 15), end=_pos(2, 16))


def test_hover_misses(lsp, sample_source):
    _open(lsp, sample_source)
    params = HoverParams(text_document=TextDocumentIdentifier(uri=URI), position=_pos(0, 10))
    assert lsp.module.on_hover(params) is None
    other = HoverParams(text_document=TextDocumentIdentifier(uri="file:///none"), position=_pos(0, 0))
    assert lsp.module.on_hover(other) is None


def test_completion(lsp):
    _open(lsp, "var count = 1; function step(n) { return n; }")
    result = lsp.module.on_completion(
        CompletionParams(text_document=TextDocumentIdentifier(uri=URI), position=_pos(0, 0))
    )
    kinds = {item.label: item.kind for item in result.items}
    assert kinds["count"] == CompletionItemKind.Variable
    assert kinds["step"] == CompletionItemKind.Function
    assert kinds["while"] == CompletionItemKind.Keyword


def test_document_symbols(lsp, sample_source):
    _open(lsp, sample_source)
    symbols = lsp.module.on_document_symbols(
        DocumentSymbolParams(text_document=TextDocumentIdentifier(uri=URI))
    )
    assert [s.name for s in symbols] == ["a", "b"]
    assert symbols[1].kind == SymbolKind.Variable
    assert symbols[1].selection_range == Range(start=_pos(1, 4), end=_pos(1, 5))


def test_did_close_clears_diagnostics(lsp, sample_source):
    _open(lsp, sample_source)
    lsp.module.did_close(DidCloseTextDocumentParams(text_document=TextDocumentIdentifier(uri=URI)))
    assert lsp.published[URI] == []
    assert lsp.module.ls.documents.document_ids() == []


def test_did_open_with_deep_nesting_publishes_error(lsp):
    _open(lsp, "var a = " + "[" * 500 + "]" * 500 + ";")
    (diag,) = lsp.published[URI]
    assert diag.severity == DiagnosticSeverity.Error
    assert diag.message == "expected shallower nesting"


@pytest.mark.parametrize("argv,level", [(["--verbose"], logging.DEBUG), ([], logging.WARNING)])
def test_main_applies_verbose_flag(lsp, monkeypatch, argv, level):
    monkeypatch.delenv("LEEK_LOG_LEVEL", raising=False)
    started = []
    monkeypatch.setattr(lsp.module, "setup_logger", lambda name: logging.getLogger(name))
    monkeypatch.setattr(lsp.module.ls, "start_io", lambda: started.append(True))
    loggers = [logging.getLogger(name) for name in ("leek", "leek_lsp")]
    saved = [lg.level for lg in loggers]
    try:
        lsp.module.main(argv)
        assert started == [True]
        assert [lg.level for lg in loggers] == [level, level]
    finally:
        for lg, lvl in zip(loggers, saved):
            lg.setLevel(lvl)
