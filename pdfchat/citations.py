"""Citation extraction from retrieved pages."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from .config import config
from .context import TRUNCATION_MARKER
from .models import Citation

if TYPE_CHECKING:
    from .models import Document, ScoredPage

_SENTENCE_BREAK_RE = re.compile(r"[.!?]")


def extract_excerpt(text: str, max_length: int) -> str:
    """Pick the first sentence of ``text`` as a citation excerpt.

    Returns:
        The first non-blank sentence, trimmed and cut to ``max_length`` with a
        truncation marker; or the head of the raw text when no sentence has
        content.
    """
    for segment in _SENTENCE_BREAK_RE.split(text):
        sentence = segment.strip()
        if not sentence:
            continue
        if len(sentence) <= max_length:
            return sentence
        return sentence[:max_length] + TRUNCATION_MARKER

    return text[:max_length] + TRUNCATION_MARKER


class CitationExtractor:
    """Turns relevant scored pages into user-facing citations."""

    def __init__(
        self,
        relevance_threshold: float | None = None,
        excerpt_max_length: int | None = None,
    ) -> None:
        """Initialize the CitationExtractor.

        Args:
            relevance_threshold: Pages must score strictly above this value.
                If None, uses config.RELEVANCE_THRESHOLD.
            excerpt_max_length: Excerpt length before truncation. If None,
                uses config.EXCERPT_MAX_LENGTH.
        """
        self.relevance_threshold = (
            relevance_threshold
            if relevance_threshold is not None
            else config.RELEVANCE_THRESHOLD
        )
        self.excerpt_max_length = (
            excerpt_max_length
            if excerpt_max_length is not None
            else config.EXCERPT_MAX_LENGTH
        )

    def extract(
        self, scored_pages: list[ScoredPage], document: Document
    ) -> list[Citation]:
        """Build citations for pages above the relevance threshold, in order."""
        citations = []
        for scored in scored_pages:
            if scored.score <= self.relevance_threshold:
                continue
            text = document.page_text(scored.page_number)
            if text is None:
                continue
            citations.append(
                Citation(
                    page_number=scored.page_number,
                    excerpt=extract_excerpt(text, self.excerpt_max_length),
                    relevance_score=scored.score,
                )
            )
        return citations
