from __future__ import annotations

import logging
from typing import Optional

from leek.document import Completion, Diagnostic, DocumentModel, NodeInfo, TextChange
from leek.errors import UnknownDocumentError
from leek.rwlock import RWLock
from leek.types.ast import Declaration
from leek.types.position import Position, Range

logger = logging.getLogger(__name__)


class Workspace:
    """
    Open documents by identifier, behind one read/write lock.

    open/change/close hold the lock exclusively and finish re-parsing before
    releasing it; queries share it and always see a consistent revision.
    """

    def __init__(self):
        self._lock = RWLock()
        self._documents: dict[str, DocumentModel] = {}

    def open_document(self, uri: str, text: str) -> None:
        with self._lock.write():
            self._documents[uri] = DocumentModel(uri, text)
        logger.info("opened %s", uri)

    def apply_change(self, uri: str, change: TextChange) -> bool:
        with self._lock.write():
            return self._get(uri).apply_change(change)

    def close_document(self, uri: str) -> None:
        with self._lock.write():
            if self._documents.pop(uri, None) is not None:
                logger.info("closed %s", uri)

    def document_ids(self) -> list[str]:
        with self._lock.read():
            return list(self._documents)

    def text_of(self, uri: str) -> str:
        with self._lock.read():
            return self._get(uri).text

    def query_node_at(self, uri: str, position: Position) -> Optional[NodeInfo]:
        with self._lock.read():
            return self._get(uri).node_info_at(position)

    def query_declarations(self, uri: str) -> list[Declaration]:
        with self._lock.read():
            return list(self._get(uri).declarations)

    def query_diagnostics(self, uri: str) -> list[Diagnostic]:
        with self._lock.read():
            return self._get(uri).diagnostics()

    def query_completions(self, uri: str) -> list[Completion]:
        with self._lock.read():
            return self._get(uri).completions()

    def query_declaration_ranges(self, uri: str) -> list[tuple[Declaration, Range, Range]]:
        """Declarations paired with their statement and name ranges."""
        with self._lock.read():
            doc = self._get(uri)
            return [
                (decl, doc.span_to_range(decl.span), doc.span_to_range(decl.name_span))
                for decl in doc.declarations
            ]

    def _get(self, uri: str) -> DocumentModel:
        doc = self._documents.get(uri)
        if doc is None:
            raise UnknownDocumentError(uri)
        return doc
