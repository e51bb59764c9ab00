import pytest

from leek.workspace import Workspace

# Program used throughout the suite. Statements start at offsets 0, 11 and 22;
# the text is 42 characters long.
SAMPLE_SOURCE = "var a = 3;\nvar b = 4;\nif (a) { print(a); }"


@pytest.fixture
def sample_source():
    return SAMPLE_SOURCE


@pytest.fixture
def workspace():
    ws = Workspace()
    ws.open_document("file:///sample.leek", SAMPLE_SOURCE)
    return ws


@pytest.fixture
def lsp(monkeypatch):
    """The module-level language server with a fresh Workspace and a captured client side."""
    from leek_lsp import server

    published = {}
    log_messages = []

    def fake_publish(params):
        published[params.uri] = params.diagnostics

    monkeypatch.setattr(server.ls, "documents", Workspace())
    monkeypatch.setattr(server.ls, "text_document_publish_diagnostics", fake_publish)
    monkeypatch.setattr(server.ls, "window_log_message", log_messages.append)

    class Harness:
        module = server

    h = Harness()
    h.published = published
    h.log_messages = log_messages
    return h
