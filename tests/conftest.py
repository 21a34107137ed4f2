"""Test configuration and fixtures for PDF Chat tests.

This module provides reusable test fixtures organized by functionality:
- Constants and test data
- Mock embedders and generators
- OpenAI API response helpers
- Document and session factories
"""

import asyncio
import hashlib
from unittest.mock import Mock, patch

import numpy as np
import pytest

from pdfchat import (
    AnswerPipeline,
    ConversationManager,
    Document,
    DocumentLoader,
    DocumentSession,
    EmbeddingService,
    ModelFailureError,
)


class TestConstants:
    """Centralized test constants shared across test files."""

    TEST_API_KEY = "test-key"
    TEST_OPENAI_MODEL = "text-embedding-3-small"
    DEFAULT_EMBEDDING_DIMENSION = 64

    CAT_PAGE = "The cat sat on the mat."
    DOG_PAGE = "Dogs bark loudly at night."
    KEYWORDS = ("cat", "dog", "night", "mat")
    FAKE_ANSWER = "The cat sat on the mat (page 1)."


class MockEmbeddingService:
    """Deterministic embedder seeded from the text hash."""

    def __init__(
        self, dimension: int = TestConstants.DEFAULT_EMBEDDING_DIMENSION
    ) -> None:
        self.dimension = dimension
        self.calls: list[str] = []

    def embed(self, text: str) -> np.ndarray | None:
        self.calls.append(text)
        if not text.strip():
            return None
        seed = int.from_bytes(
            hashlib.sha256(text.lower().encode("utf-8")).digest()[:8],
            byteorder="big",
            signed=False,
        )
        rng = np.random.default_rng(seed)
        embedding = rng.normal(0, 1, self.dimension)
        return embedding / np.linalg.norm(embedding)


class KeywordEmbedder:
    """Embeds text as keyword counts, so rankings are easy to predict.

    Texts listed in ``unembeddable`` return None, like a model that does
    not recognize any token.
    """

    def __init__(
        self,
        keywords: tuple[str, ...] = TestConstants.KEYWORDS,
        unembeddable: set[str] | None = None,
    ) -> None:
        self.keywords = keywords
        self.unembeddable = unembeddable or set()
        self.calls: list[str] = []

    def embed(self, text: str) -> np.ndarray | None:
        self.calls.append(text)
        if not text.strip() or text in self.unembeddable:
            return None
        lowered = text.lower()
        return np.array([lowered.count(word) for word in self.keywords], dtype=float)


class UnavailableEmbedder:
    """Embedder whose model never loaded."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def embed(self, text: str) -> None:
        self.calls.append(text)


class FakeGenerator:
    """Records prompts and returns a canned answer or raises."""

    def __init__(
        self, answer: str = TestConstants.FAKE_ANSWER, *, fail: bool = False
    ) -> None:
        self.answer = answer
        self.fail = fail
        self.prompts: list[str] = []

    def generate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.fail:
            msg = "quota exceeded"
            raise ModelFailureError(msg)
        return self.answer


class AsyncFakeGenerator(FakeGenerator):
    """Generator with an async path that can be held open until released."""

    def __init__(self, answer: str = TestConstants.FAKE_ANSWER, *, block: bool = False):
        super().__init__(answer)
        self.block = block
        self.started = asyncio.Event()

    async def agenerate(self, prompt: str) -> str:
        self.prompts.append(prompt)
        self.started.set()
        if self.block:
            await asyncio.Event().wait()
        return self.answer


def create_mock_openai_response(embeddings: list[list[float]]) -> Mock:
    """Create a mock OpenAI embeddings API response."""
    mock_response = Mock()
    mock_response.data = [Mock(embedding=emb) for emb in embeddings]
    return mock_response


def create_mock_chat_response(content: str | None) -> Mock:
    """Create a mock OpenAI chat completion response."""
    mock_response = Mock()
    mock_response.choices = [Mock(message=Mock(content=content))]
    return mock_response


@pytest.fixture
def openai_embeddings_api_mock():
    """Patch the OpenAI embeddings.create method."""
    with patch("openai.resources.embeddings.Embeddings.create") as mock_create:
        yield mock_create


@pytest.fixture
def embedding_service():
    """EmbeddingService with a test API key."""
    return EmbeddingService(api_key=TestConstants.TEST_API_KEY)


@pytest.fixture
def keyword_embedder():
    return KeywordEmbedder()


@pytest.fixture
def mock_embedding_service():
    return MockEmbeddingService()


@pytest.fixture
def unavailable_embedder():
    return UnavailableEmbedder()


@pytest.fixture
def fake_generator():
    return FakeGenerator()


@pytest.fixture
def failing_generator():
    return FakeGenerator(fail=True)


@pytest.fixture
def document_factory():
    """Factory for Documents built from a page mapping."""

    def _create_document(
        pages: dict[int, str], title: str = "test document"
    ) -> Document:
        return DocumentLoader.from_pages(pages, title=title)

    return _create_document


@pytest.fixture
def cat_dog_document(document_factory):
    """Two-page document used by the retrieval scenarios."""
    return document_factory(
        {1: TestConstants.CAT_PAGE, 2: TestConstants.DOG_PAGE},
        title="pets",
    )


@pytest.fixture
def empty_document(document_factory):
    return document_factory({}, title="empty")


@pytest.fixture
def pipeline_factory(keyword_embedder, fake_generator):
    """Factory for AnswerPipeline instances with test doubles as defaults."""

    def _create_pipeline(embedder=None, generator=None, **kwargs) -> AnswerPipeline:
        return AnswerPipeline(
            embedder=embedder if embedder is not None else keyword_embedder,
            generator=generator if generator is not None else fake_generator,
            **kwargs,
        )

    return _create_pipeline


@pytest.fixture
def cat_dog_session(cat_dog_document):
    return DocumentSession(cat_dog_document)


@pytest.fixture
def conversation_factory(pipeline_factory):
    """Factory for ConversationManager instances over a fresh session."""

    def _create_conversation(document=None, **pipeline_kwargs) -> ConversationManager:
        manager = ConversationManager(pipeline_factory(**pipeline_kwargs))
        if document is not None:
            manager.load_document(document)
        return manager

    return _create_conversation
