"""Conversation management on top of the answering pipeline."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import config
from .errors import DocumentUnavailableError, InvalidQueryError, ModelFailureError
from .models import Author, ChatMessage
from .session import DocumentSession

if TYPE_CHECKING:
    from .models import Document
    from .pipeline import AnswerPipeline

logger = config.get_logger(__name__)


class ConversationManager:
    """Keeps the chat history of one document session."""

    def __init__(
        self,
        pipeline: AnswerPipeline,
        session: DocumentSession | None = None,
    ) -> None:
        """Initialize ConversationManager.

        Args:
            pipeline: Answering pipeline, possibly shared with other sessions.
            session: Document session. If None, starts with an empty one.
        """
        self.pipeline = pipeline
        self.session = session if session is not None else DocumentSession()
        self.messages: list[ChatMessage] = []

    def load_document(self, document: Document) -> None:
        """Replace the active document and index it."""
        self.pipeline.ingest(document, self.session)

    def ask(self, question: str) -> ChatMessage:
        """Answer a question and record both sides of the exchange.

        Returns:
            ChatMessage: The assistant message carrying the citations.

        Raises:
            InvalidQueryError: If the question is blank; history is unchanged.
            DocumentUnavailableError: If no document is loaded; history is
                unchanged.
            ModelFailureError: If the model call fails; only the user message
                is recorded.
        """
        if not question or not question.strip():
            msg = "Question must not be empty"
            raise InvalidQueryError(msg)
        if self.session.document is None:
            msg = "Load a document before asking questions"
            raise DocumentUnavailableError(msg)

        logger.info("Processing question: %s", question)
        self.messages.append(ChatMessage(text=question, author=Author.USER))

        try:
            answer = self.pipeline.answer(question, self.session)
        except ModelFailureError:
            logger.exception("Answer generation failed")
            raise

        reply = ChatMessage(
            text=answer.text,
            author=Author.ASSISTANT,
            citations=tuple(answer.citations),
        )
        self.messages.append(reply)

        for citation in answer.citations:
            logger.info(
                "  Cited page %d (score: %.4f): %s",
                citation.page_number,
                citation.relevance_score,
                citation.excerpt[:100],
            )
        return reply

    def clear_history(self) -> None:
        """Clear the conversation history."""
        self.messages = []
        logger.info("Conversation history cleared.")

    def remove_document(self) -> None:
        """Drop the active document, its index and the chat about it."""
        self.session.clear_document()
        self.clear_history()
