"""Per-session document state."""

from __future__ import annotations

import threading
from typing import TYPE_CHECKING

from .config import config
from .errors import DocumentUnavailableError
from .index import DocumentIndex

if TYPE_CHECKING:
    from .embeddings import Embedder
    from .models import Document

logger = config.get_logger(__name__)


class DocumentSession:
    """Holds the active document and the index snapshot built for it.

    The index is replaced wholesale, never mutated. A query works on the
    ``(document, index)`` pair it obtained from :meth:`ensure_index`; loading
    another document meanwhile does not affect that pair, and an index built
    for a document that has since been replaced is not installed.
    """

    def __init__(self, document: Document | None = None) -> None:
        self._lock = threading.Lock()
        self._document = document
        self._index: DocumentIndex | None = None

    @property
    def document(self) -> Document | None:
        return self._document

    @property
    def index(self) -> DocumentIndex | None:
        return self._index

    def load_document(self, document: Document) -> None:
        """Make ``document`` active, discarding the previous one and its index."""
        with self._lock:
            self._document = document
            self._index = None
        logger.info(
            "Loaded document '%s' (%d pages)", document.title, document.page_count
        )

    def clear_document(self) -> None:
        with self._lock:
            self._document = None
            self._index = None

    def ensure_index(self, embedder: Embedder) -> tuple[Document, DocumentIndex]:
        """Return the active document with an index built for it.

        Raises:
            DocumentUnavailableError: If no document is loaded.
        """
        with self._lock:
            document, index = self._document, self._index

        if document is None:
            msg = "No document is loaded"
            raise DocumentUnavailableError(msg)

        if index is not None and index.covers(document):
            return document, index

        index = DocumentIndex.build(document, embedder)

        with self._lock:
            if self._document is document:
                self._index = index
            else:
                logger.info("Document changed during indexing; index not installed")

        return document, index
