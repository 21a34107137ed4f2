"""Data models for the PDF chat engine."""

import datetime
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType


@dataclass(frozen=True)
class Document:
    """A loaded PDF reduced to its per-page text.

    Page numbers are 1-based. Page text may be empty when the PDF page
    carries no extractable text. ``file_size`` is the size of the source
    file in bytes, or 0 when the pages did not come from a file.
    """

    id: str
    title: str
    pages: Mapping[int, str]
    file_size: int = 0

    def __post_init__(self) -> None:
        invalid = [number for number in self.pages if number < 1]
        if invalid:
            msg = f"Page numbers must be >= 1, got {sorted(invalid)}"
            raise ValueError(msg)
        ordered = dict(sorted(self.pages.items()))
        object.__setattr__(self, "pages", MappingProxyType(ordered))

    @property
    def page_count(self) -> int:
        return len(self.pages)

    def page_text(self, page_number: int) -> str | None:
        """Return the text of a page, or None if the page does not exist."""
        return self.pages.get(page_number)


@dataclass(frozen=True)
class ScoredPage:
    """A page paired with its relevance to one query."""

    page_number: int
    score: float


@dataclass(frozen=True)
class Citation:
    """A page reference with a short excerpt backing an answer."""

    page_number: int
    excerpt: str
    relevance_score: float


class Author(Enum):
    USER = "user"
    ASSISTANT = "assistant"


@dataclass(frozen=True)
class ChatMessage:
    """Represents a single message in the conversation."""

    text: str
    author: Author
    citations: tuple[Citation, ...] = ()
    timestamp: datetime.datetime = field(
        default_factory=lambda: datetime.datetime.now(tz=datetime.UTC)
    )

    def __post_init__(self) -> None:
        if self.citations and self.author is not Author.ASSISTANT:
            msg = "Only assistant messages can carry citations"
            raise ValueError(msg)

    @property
    def is_user(self) -> bool:
        return self.author is Author.USER


@dataclass(frozen=True)
class Answer:
    """Result of answering one query against a document."""

    text: str
    citations: list[Citation]
    scored_pages: list[ScoredPage]
    context: str
