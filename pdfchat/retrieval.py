"""Page retrieval by embedding similarity with a lexical fallback."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from .config import config
from .lexical import lexical_score
from .models import ScoredPage

if TYPE_CHECKING:
    from .embeddings import Embedder
    from .index import DocumentIndex
    from .models import Document

logger = config.get_logger(__name__)


def cosine_similarity(vector1: np.ndarray, vector2: np.ndarray) -> float:
    """Cosine similarity of two vectors.

    Returns:
        Similarity in [-1, 1]; 0.0 when the shapes differ or either vector
        has zero norm or the result is not a number.
    """
    a = np.asarray(vector1, dtype=np.float64)
    b = np.asarray(vector2, dtype=np.float64)
    if a.shape != b.shape:
        return 0.0

    norm_a = np.linalg.norm(a)
    norm_b = np.linalg.norm(b)
    if norm_a == 0 or norm_b == 0:
        return 0.0

    similarity = float(np.dot(a, b) / (norm_a * norm_b))
    if np.isnan(similarity):
        return 0.0
    return max(-1.0, min(1.0, similarity))


def _ranked(scored: list[ScoredPage]) -> list[ScoredPage]:
    return sorted(scored, key=lambda page: (-page.score, page.page_number))


class Retriever:
    """Ranks the pages of a document against a query."""

    def __init__(self, embedder: Embedder, top_k: int | None = None) -> None:
        """Initialize the Retriever.

        Args:
            embedder: Embedder used for the query vector.
            top_k: Pages kept on the embedding path. If None, uses config.TOP_K.
        """
        self.embedder = embedder
        self.top_k = top_k if top_k is not None else config.TOP_K

    def retrieve(
        self,
        query: str,
        document: Document,
        index: DocumentIndex | None,
        top_k: int | None = None,
    ) -> list[ScoredPage]:
        """Return the most relevant pages of ``document`` for ``query``.

        Uses cosine similarity against ``index`` when both the index and the
        query embedding are available, otherwise falls back to lexical
        matching over every page of the document.

        Returns:
            Pages sorted by descending score, ties broken by page number.
        """
        if top_k is None:
            top_k = self.top_k

        if index is not None and not index.is_empty and index.covers(document):
            query_embedding = self.embedder.embed(query)
            if query_embedding is not None:
                return self.semantic_search(query_embedding, index, top_k)
            logger.info("Query embedding unavailable, using lexical fallback")

        return self.lexical_search(query, document)

    @staticmethod
    def semantic_search(
        query_embedding: np.ndarray,
        index: DocumentIndex,
        top_k: int,
    ) -> list[ScoredPage]:
        scored = [
            ScoredPage(page_number, cosine_similarity(query_embedding, vector))
            for page_number, vector in index.vectors.items()
        ]
        return _ranked(scored)[:top_k]

    @staticmethod
    def lexical_search(query: str, document: Document) -> list[ScoredPage]:
        """Score every page by token overlap, keeping only matching pages."""
        scored = []
        for page_number, text in document.pages.items():
            score = lexical_score(query, text)
            if score > 0:
                scored.append(ScoredPage(page_number, score))
        return _ranked(scored)
