"""Web interface using Streamlit."""

import tempfile
from pathlib import Path

import streamlit as st

from pdfchat import (
    AnswerPipeline,
    ConversationManager,
    DocumentLoader,
    ModelFailureError,
    OpenAIChatGenerator,
    get_embedding_service,
)
from pdfchat.config import config

config.setup_logging()
logger = config.get_logger(__name__)

FILE_SIZE_UNITS = ("KB", "MB", "GB")


def format_file_size(num_bytes: int) -> str:
    """Format a byte count with decimal units, e.g. ``1.5 MB``.

    Returns:
        str: Human readable size.
    """
    if num_bytes < 1000:  # noqa: PLR2004
        return f"{num_bytes} bytes"
    size = num_bytes / 1000
    for unit in FILE_SIZE_UNITS[:-1]:
        if size < 1000:  # noqa: PLR2004
            return f"{size:.1f} {unit}"
        size /= 1000
    return f"{size:.1f} {FILE_SIZE_UNITS[-1]}"


def validate_configuration() -> bool:
    """Validate application configuration and show user feedback.

    Returns:
        bool: True if configuration is valid, False otherwise.
    """
    try:
        config.validate()
    except ValueError as e:
        st.error(f"Configuration Error: {e}")
        return False
    else:
        return True


def get_conversation() -> ConversationManager | None:
    """Return this browser session's conversation, creating it on first use.

    Returns:
        ConversationManager | None: The per-session conversation, or None
            when the configuration is invalid.
    """
    if "conversation" not in st.session_state:
        if not validate_configuration():
            return None
        pipeline = AnswerPipeline(
            embedder=get_embedding_service(),
            generator=OpenAIChatGenerator(),
        )
        st.session_state.conversation = ConversationManager(pipeline)
    return st.session_state.conversation


def process_upload(conversation: ConversationManager, uploaded_file) -> bool:  # noqa: ANN001
    """Load an uploaded PDF into the conversation's session.

    Returns:
        bool: True if the document was loaded.
    """
    tmp_file_path = None
    try:
        with tempfile.NamedTemporaryFile(delete=False, suffix=".pdf") as tmp_file:
            tmp_file_path = Path(tmp_file.name)
            tmp_file.write(uploaded_file.getbuffer())

        with st.spinner(f"Processing '{uploaded_file.name}'..."):
            document = DocumentLoader.load_pdf(
                tmp_file_path, title=Path(uploaded_file.name).stem
            )
            conversation.load_document(document)
    except (OSError, ValueError) as e:
        logger.exception("Document processing failed")
        st.error(f"Failed to process document: {e}")
        return False
    else:
        return True
    finally:
        if tmp_file_path is not None:
            tmp_file_path.unlink(missing_ok=True)


def render_sidebar(conversation: ConversationManager) -> None:
    """Render document upload and status."""
    with st.sidebar:
        st.header("Document")
        uploaded_file = st.file_uploader("Upload a PDF", type=["pdf"])
        if (
            uploaded_file
            and st.button("Load Document", use_container_width=True)
            and process_upload(conversation, uploaded_file)
        ):
            st.rerun()

        document = conversation.session.document
        if document is None:
            st.write("**Document:** None")
        else:
            st.write(f"**Document:** {document.title}")
            st.write(f"**Pages:** {document.page_count}")
            st.write(f"**Size:** {format_file_size(document.file_size)}")
            index = conversation.session.index
            if index is not None:
                st.write(f"**Indexed pages:** {index.coverage}")
            if st.button("Remove Document", use_container_width=True):
                conversation.remove_document()
                st.rerun()

        st.divider()
        if st.button("Clear Chat", use_container_width=True):
            conversation.clear_history()
            st.rerun()


def render_messages(conversation: ConversationManager) -> None:
    """Render the chat history with citations under assistant replies."""
    for message in conversation.messages:
        with st.chat_message("user" if message.is_user else "assistant"):
            st.write(message.text)
            for citation in message.citations:
                with st.expander(f"Page {citation.page_number}", expanded=False):
                    st.caption(citation.excerpt)


def main() -> None:
    """Main entry point for the Streamlit web application."""
    st.set_page_config(page_title="PDF Chat", layout="wide")
    st.title("PDF Chat")

    conversation = get_conversation()
    if conversation is None:
        return
    render_sidebar(conversation)

    if conversation.session.document is None:
        st.info("Upload a PDF using the sidebar to get started.")
        return

    render_messages(conversation)

    question = st.chat_input("Ask anything about your document...")
    if question and question.strip():
        with st.spinner("Thinking..."):
            try:
                conversation.ask(question)
            except ModelFailureError:
                st.error(
                    "I'm sorry, I encountered an error processing your request. "
                    "Please try again."
                )
                return
        st.rerun()


if __name__ == "__main__":
    main()
