"""Document loading into per-page text."""

import uuid
from collections.abc import Mapping
from pathlib import Path

import pypdf
from pypdf.errors import PyPdfError

from .config import config
from .models import Document

logger = config.get_logger(__name__)


class DocumentLoader:
    """Builds Document values from PDF files or page mappings."""

    @staticmethod
    def from_pages(
        pages: Mapping[int, str],
        title: str = "document",
        document_id: str | None = None,
        file_size: int = 0,
    ) -> Document:
        """Wrap already extracted page text in a Document.

        Returns:
            A new Document with a fresh id unless ``document_id`` is given.
        """
        return Document(
            id=document_id or uuid.uuid4().hex,
            title=title,
            pages=pages,
            file_size=file_size,
        )

    @classmethod
    def load_pdf(cls, file_path: Path, title: str | None = None) -> Document:
        """Extract the text of every page of a PDF file.

        Pages without extractable text are kept with empty text.

        Returns:
            The Document for the PDF, titled after the file name unless
            ``title`` is given.

        Raises:
            ValueError: If the file is not a PDF or pypdf cannot parse it.
        """
        file_path = Path(file_path)
        if file_path.suffix.lower() != ".pdf":
            msg = f"Unsupported file type: {file_path.suffix.lower()}"
            raise ValueError(msg)

        try:
            with file_path.open("rb") as file:
                pdf_reader = pypdf.PdfReader(file)
                pages = {
                    page_num + 1: page.extract_text() or ""
                    for page_num, page in enumerate(pdf_reader.pages)
                }
            file_size = file_path.stat().st_size
        except PyPdfError as e:
            logger.exception("Error parsing PDF %s", file_path)
            msg = f"Unreadable PDF {file_path.name}: {e}"
            raise ValueError(msg) from e
        except Exception:
            logger.exception("Error loading PDF %s", file_path)
            raise

        logger.info("Loaded %d pages from %s", len(pages), file_path.name)
        return cls.from_pages(
            pages, title=title or file_path.stem, file_size=file_size
        )
