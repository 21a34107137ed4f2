"""Tests for the command-line entry point."""

from pathlib import Path
from unittest.mock import patch

import main
from pdfchat import Answer, Citation


def test_parse_ask_arguments():
    args = main.parse_args(["ask", "doc.pdf", "What is it?", "--top-k", "5"])

    assert args.command == "ask"
    assert args.pdf == Path("doc.pdf")
    assert args.question == "What is it?"
    assert args.top_k == 5


def test_parse_ui_defaults():
    args = main.parse_args(["ui"])

    assert args.port == 8501
    assert args.address == "localhost"


def test_format_answer_lists_citations():
    answer = Answer(
        text="It is a cat.",
        citations=[Citation(page_number=2, excerpt="A cat", relevance_score=0.8)],
        scored_pages=[],
        context="",
    )

    assert main.format_answer(answer) == "It is a cat.\n\nSources:\n  [p. 2] A cat"


def test_format_answer_without_citations():
    answer = Answer(text="Not in the document.", citations=[], scored_pages=[], context="")

    assert main.format_answer(answer) == "Not in the document."


def test_ask_requires_api_key(tmp_path):
    with (
        patch.object(type(main.config), "get_openai_api_key", return_value=""),
        patch("logging.basicConfig"),
    ):
        assert main.main(["ask", str(tmp_path / "doc.pdf"), "question"]) == 1


def test_ask_reports_unreadable_pdf(tmp_path):
    with (
        patch.object(type(main.config), "get_openai_api_key", return_value="test-key"),
        patch("logging.basicConfig"),
    ):
        assert main.main(["ask", str(tmp_path / "missing.pdf"), "question"]) == 1


def test_ask_reports_corrupt_pdf(tmp_path):
    path = tmp_path / "bad.pdf"
    path.write_bytes(b"not a pdf at all")

    with (
        patch.object(type(main.config), "get_openai_api_key", return_value="test-key"),
        patch("logging.basicConfig"),
    ):
        assert main.main(["ask", str(path), "cat"]) == 1


def test_ask_rejects_blank_question_before_loading(tmp_path):
    with (
        patch.object(type(main.config), "get_openai_api_key", return_value="test-key"),
        patch("main.DocumentLoader.load_pdf") as mock_load,
        patch("main.get_embedding_service") as mock_embedder,
        patch("logging.basicConfig"),
    ):
        assert main.main(["ask", str(tmp_path / "doc.pdf"), "   "]) == 1

    mock_load.assert_not_called()
    mock_embedder.assert_not_called()


def test_ui_launches_streamlit():
    with (
        patch("main.subprocess.run") as mock_run,
        patch("logging.basicConfig"),
    ):
        mock_run.return_value.returncode = 0
        assert main.main(["ui", "--port", "9000"]) == 0

    command = mock_run.call_args.args[0]
    assert command[1:4] == ["-m", "streamlit", "run"]
    assert str(main.DEFAULT_APP) in command
    assert "9000" in command
