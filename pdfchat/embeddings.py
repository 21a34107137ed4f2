"""OpenAI embeddings service."""

from __future__ import annotations

from functools import cache
from typing import Protocol

import numpy as np
import openai
from openai import OpenAI

from .config import config

logger = config.get_logger(__name__)


class Embedder(Protocol):
    """Anything that turns text into a vector, or None when it cannot."""

    def embed(self, text: str) -> np.ndarray | None: ...


class EmbeddingService:
    """Handles OpenAI embeddings generation.

    The service never raises on construction: without an API key, or when
    the client cannot be built, it stays unavailable and ``embed`` always
    returns None so retrieval falls back to lexical matching.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
    ) -> None:
        """Initialize the EmbeddingService with OpenAI API key and model.

        Args:
            api_key: OpenAI API key. If None,
                reads from OPENAI_API_KEY environment variable.
            model: Embedding model name. If None, uses config.EMBEDDING_MODEL.
        """
        self.model = model or config.EMBEDDING_MODEL
        self.client: OpenAI | None = None

        api_key = api_key or config.get_openai_api_key()
        if not api_key:
            logger.warning("No OpenAI API key configured; embeddings disabled")
            return

        default_headers = config.get_api_headers()
        try:
            self.client = OpenAI(
                api_key=api_key,
                base_url=config.OPENAI_BASE_URL,
                default_headers=default_headers or None,
            )
        except openai.OpenAIError:
            logger.warning("Embedding client unavailable; embeddings disabled")

    @property
    def available(self) -> bool:
        return self.client is not None

    def embed(self, text: str) -> np.ndarray | None:
        """Get embedding for a single text.

        Args:
            text: The input text to generate an embedding for.

        Returns:
            The embedding vector, or None if the text is blank or the model
            could not process it.
        """
        if self.client is None or not text or not text.strip():
            return None

        try:
            response = self.client.embeddings.create(
                model=self.model,
                input=text,
            )
        except openai.OpenAIError as e:
            logger.warning("Embedding generation failed: %s", e)
            return None

        if not response.data or not response.data[0].embedding:
            logger.warning("Embedding response contained no vector")
            return None
        return np.asarray(response.data[0].embedding, dtype=np.float64)


@cache
def get_embedding_service() -> EmbeddingService:
    """Return the process-wide embedding service, created on first use."""
    return EmbeddingService()
