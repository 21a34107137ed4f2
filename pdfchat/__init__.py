"""PDF Chat - page-cited question answering over PDF documents."""

from .citations import CitationExtractor
from .context import ContextBuilder
from .conversation import ConversationManager
from .document_processing import DocumentLoader
from .embeddings import EmbeddingService, get_embedding_service
from .errors import (
    DocumentUnavailableError,
    InvalidQueryError,
    ModelFailureError,
    PDFChatError,
)
from .generation import OpenAIChatGenerator
from .index import DocumentIndex
from .models import Answer, Author, ChatMessage, Citation, Document, ScoredPage
from .pipeline import AnswerPipeline
from .retrieval import Retriever, cosine_similarity
from .session import DocumentSession

__all__ = [
    "Answer",
    "AnswerPipeline",
    "Author",
    "ChatMessage",
    "Citation",
    "CitationExtractor",
    "ContextBuilder",
    "ConversationManager",
    "Document",
    "DocumentIndex",
    "DocumentLoader",
    "DocumentSession",
    "DocumentUnavailableError",
    "EmbeddingService",
    "InvalidQueryError",
    "ModelFailureError",
    "OpenAIChatGenerator",
    "PDFChatError",
    "Retriever",
    "ScoredPage",
    "cosine_similarity",
    "get_embedding_service",
]
