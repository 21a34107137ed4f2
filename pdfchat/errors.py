"""Error kinds surfaced by the answering pipeline."""


class PDFChatError(Exception):
    """Base class for errors raised to the chat collaborator."""


class InvalidQueryError(PDFChatError, ValueError):
    """The query was empty or whitespace only."""


class DocumentUnavailableError(PDFChatError, ValueError):
    """An answer was requested while no document is loaded."""


class ModelFailureError(PDFChatError, RuntimeError):
    """The generative model call failed or returned nothing usable."""
