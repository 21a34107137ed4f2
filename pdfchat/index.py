"""Per-page embedding index for a single document."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from .config import config

if TYPE_CHECKING:
    import numpy as np

    from .embeddings import Embedder
    from .models import Document

logger = config.get_logger(__name__)


@dataclass(frozen=True)
class DocumentIndex:
    """Immutable snapshot of page embeddings for one document.

    Pages with non-empty text that the embedder could not process are
    recorded in ``skipped_pages`` and have no vector.
    """

    document_id: str
    vectors: Mapping[int, np.ndarray] = field(default_factory=dict)
    skipped_pages: tuple[int, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "vectors", MappingProxyType(dict(self.vectors)))

    @classmethod
    def build(cls, document: Document, embedder: Embedder) -> DocumentIndex:
        """Embed every non-empty page of ``document``.

        Returns:
            A new index; the document itself is left untouched.
        """
        vectors: dict[int, np.ndarray] = {}
        skipped: list[int] = []

        for page_number, text in document.pages.items():
            if not text.strip():
                continue
            embedding = embedder.embed(text)
            if embedding is None:
                logger.debug("No embedding for page %d", page_number)
                skipped.append(page_number)
                continue
            vectors[page_number] = embedding

        logger.info(
            "Indexed %d/%d pages of '%s'",
            len(vectors),
            document.page_count,
            document.title,
        )
        return cls(
            document_id=document.id,
            vectors=vectors,
            skipped_pages=tuple(skipped),
        )

    @property
    def coverage(self) -> int:
        """Number of pages that have an embedding."""
        return len(self.vectors)

    @property
    def is_empty(self) -> bool:
        return not self.vectors

    def covers(self, document: Document) -> bool:
        """Check whether this index was built for ``document``."""
        return self.document_id == document.id

    def __len__(self) -> int:
        return len(self.vectors)
