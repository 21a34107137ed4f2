"""Answering pipeline orchestrating Retrieve -> Context -> Generate -> Cite."""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

from .citations import CitationExtractor
from .config import config
from .context import ContextBuilder
from .errors import InvalidQueryError
from .generation import build_prompt
from .models import Answer
from .retrieval import Retriever
from .session import DocumentSession

if TYPE_CHECKING:
    from .embeddings import Embedder
    from .generation import Generator
    from .models import Document, ScoredPage

logger = config.get_logger(__name__)


class AnswerPipeline:
    """Answers questions about a session's document with page citations.

    The pipeline keeps no per-query state and can be shared by any number of
    sessions.
    """

    def __init__(  # noqa: PLR0913,PLR0917
        self,
        embedder: Embedder,
        generator: Generator,
        top_k: int | None = None,
        max_page_length: int | None = None,
        relevance_threshold: float | None = None,
        excerpt_max_length: int | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            embedder: Embedder shared by indexing and query embedding.
            generator: Generative model collaborator.
            top_k: Pages kept on the embedding path. If None, uses config.TOP_K.
            max_page_length: Per-page context cap. If None, uses
                config.MAX_PAGE_LENGTH.
            relevance_threshold: Citation score floor. If None, uses
                config.RELEVANCE_THRESHOLD.
            excerpt_max_length: Citation excerpt length. If None, uses
                config.EXCERPT_MAX_LENGTH.
        """
        self.embedder = embedder
        self.generator = generator
        self.retriever = Retriever(embedder, top_k=top_k)
        self.context_builder = ContextBuilder(max_page_length=max_page_length)
        self.citation_extractor = CitationExtractor(
            relevance_threshold=relevance_threshold,
            excerpt_max_length=excerpt_max_length,
        )

    def ingest(self, document: Document, session: DocumentSession) -> None:
        """Load ``document`` into ``session`` and build its index eagerly."""
        session.load_document(document)
        session.ensure_index(self.embedder)

    @staticmethod
    def _validate(query: str) -> None:
        if not query or not query.strip():
            msg = "Query must not be empty"
            raise InvalidQueryError(msg)

    def _prepare(
        self, query: str, session: DocumentSession
    ) -> tuple[Document, list[ScoredPage], str]:
        document, index = session.ensure_index(self.embedder)
        scored_pages = self.retriever.retrieve(query, document, index)
        context = self.context_builder.build(scored_pages, document)
        logger.info(
            "Retrieved pages %s for query: %s",
            [page.page_number for page in scored_pages],
            query,
        )
        return document, scored_pages, context

    def _finish(
        self,
        answer_text: str,
        document: Document,
        scored_pages: list[ScoredPage],
        context: str,
    ) -> Answer:
        citations = self.citation_extractor.extract(scored_pages, document)
        return Answer(
            text=answer_text,
            citations=citations,
            scored_pages=scored_pages,
            context=context,
        )

    def answer(self, query: str, session: DocumentSession) -> Answer:
        """Answer ``query`` from the session's active document.

        Returns:
            Answer: The model answer with citations for the relevant pages.

        Raises:
            InvalidQueryError: If the query is blank.
            DocumentUnavailableError: If the session has no document.
            ModelFailureError: If the model call fails; no citations are built.
        """
        self._validate(query)
        document, scored_pages, context = self._prepare(query, session)
        answer_text = self.generator.generate(build_prompt(context, query))
        return self._finish(answer_text, document, scored_pages, context)

    def answer_document(self, query: str, document: Document | None) -> Answer:
        """Answer ``query`` against ``document`` in a throwaway session."""
        self._validate(query)
        return self.answer(query, DocumentSession(document))

    async def aanswer(self, query: str, session: DocumentSession) -> Answer:
        """Cancellable async form of :meth:`answer`.

        Indexing and retrieval run in a worker thread; the model call awaits
        the generator's ``agenerate`` when it has one.
        """
        self._validate(query)
        document, scored_pages, context = await asyncio.to_thread(
            self._prepare, query, session
        )

        prompt = build_prompt(context, query)
        agenerate = getattr(self.generator, "agenerate", None)
        if agenerate is not None:
            answer_text = await agenerate(prompt)
        else:
            answer_text = await asyncio.to_thread(self.generator.generate, prompt)

        return self._finish(answer_text, document, scored_pages, context)
