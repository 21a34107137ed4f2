"""Prompt context assembly from ranked pages."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .config import config

if TYPE_CHECKING:
    from .models import Document, ScoredPage

CONTEXT_HEADER = "Relevant document excerpts:\n\n"
TRUNCATION_MARKER = "..."


class ContextBuilder:
    """Builds the grounding text handed to the generative model."""

    def __init__(self, max_page_length: int | None = None) -> None:
        self.max_page_length = (
            max_page_length if max_page_length is not None else config.MAX_PAGE_LENGTH
        )

    def build(self, scored_pages: list[ScoredPage], document: Document) -> str:
        """Concatenate the ranked pages under a fixed header.

        Each page is introduced by ``Page N:`` and cut to ``max_page_length``
        characters. Pages unknown to ``document`` are skipped.

        Returns:
            str: The context string, at least the header.
        """
        context = CONTEXT_HEADER
        for scored in scored_pages:
            text = document.page_text(scored.page_number)
            if text is None:
                continue

            context += f"Page {scored.page_number}:\n"
            if len(text) > self.max_page_length:
                context += text[: self.max_page_length] + TRUNCATION_MARKER + "\n\n"
            else:
                context += text + "\n\n"

        return context
