"""Command-line entry point: ask a PDF a question or launch the Streamlit UI."""

from __future__ import annotations

import argparse
import subprocess
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from pdfchat import (
    AnswerPipeline,
    DocumentLoader,
    DocumentSession,
    OpenAIChatGenerator,
    PDFChatError,
    get_embedding_service,
)
from pdfchat.config import config

if TYPE_CHECKING:
    from collections.abc import Sequence
    from logging import Logger

    from pdfchat import Answer

PROJECT_ROOT = Path(__file__).resolve().parent
DEFAULT_APP = PROJECT_ROOT / "streamlit_app.py"


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Build the CLI parser and read command-line arguments."""  # noqa: DOC201
    parser = argparse.ArgumentParser(
        description="Ask questions about a PDF and get page-cited answers.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    ask = subparsers.add_parser("ask", help="Answer one question about a PDF.")
    ask.add_argument("pdf", type=Path, help="Path to the PDF document.")
    ask.add_argument("question", help="Question to ask about the document.")
    ask.add_argument(
        "--top-k",
        type=int,
        default=None,
        help=f"Pages retrieved per question (default: {config.TOP_K}).",
    )

    ui = subparsers.add_parser("ui", help="Launch the Streamlit web application.")
    ui.add_argument(
        "--port",
        type=int,
        default=8501,
        help="Port for the Streamlit server (default: 8501).",
    )
    ui.add_argument(
        "--address",
        default="localhost",
        help="Bind address for the Streamlit server (default: localhost).",
    )
    return parser.parse_args(argv)


def format_answer(answer: Answer) -> str:
    """Render an answer and its citations as plain text."""  # noqa: DOC201
    lines = [answer.text]
    if answer.citations:
        lines.extend(["", "Sources:"])
        lines.extend(
            f"  [p. {citation.page_number}] {citation.excerpt}"
            for citation in answer.citations
        )
    return "\n".join(lines)


def run_ask(args: argparse.Namespace, logger: Logger) -> int:
    """Load the PDF, answer the question and print the result."""  # noqa: DOC201
    try:
        config.validate()
    except ValueError:
        logger.exception("Configuration invalid")
        return 1

    if not args.question.strip():
        logger.error("Question must not be empty")
        return 1

    try:
        document = DocumentLoader.load_pdf(args.pdf)
    except (OSError, ValueError):
        logger.exception("Unable to read %s", args.pdf)
        return 1

    pipeline = AnswerPipeline(
        embedder=get_embedding_service(),
        generator=OpenAIChatGenerator(),
        top_k=args.top_k,
    )
    session = DocumentSession()
    pipeline.ingest(document, session)

    try:
        answer = pipeline.answer(args.question, session)
    except PDFChatError:
        logger.exception("Question could not be answered")
        return 1

    print(format_answer(answer))  # noqa: T201
    return 0


def run_ui(args: argparse.Namespace, logger: Logger) -> int:
    """Launch streamlit on the bundled app and return its exit code."""  # noqa: DOC201
    command = [
        sys.executable,
        "-m",
        "streamlit",
        "run",
        str(DEFAULT_APP),
        "--server.port",
        str(args.port),
        "--server.address",
        args.address,
    ]
    logger.info("Starting PDF Chat at http://%s:%s", args.address, args.port)
    try:
        result = subprocess.run(command, check=False, cwd=PROJECT_ROOT)
    except KeyboardInterrupt:
        logger.info("PDF Chat stopped by user")
        return 0
    except OSError:
        logger.exception("Unable to launch Streamlit")
        return 1
    return result.returncode


def main(argv: Sequence[str] | None = None) -> int:
    """Dispatch to the requested subcommand."""  # noqa: DOC201
    args = parse_args(argv)

    config.setup_logging()
    logger = config.get_logger(__name__)

    if args.command == "ask":
        return run_ask(args, logger)
    return run_ui(args, logger)


if __name__ == "__main__":
    sys.exit(main())
