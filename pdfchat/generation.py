"""Generative model access for answer synthesis."""

from __future__ import annotations

from typing import Protocol

import openai
from openai import AsyncOpenAI, OpenAI

from .config import config
from .errors import ModelFailureError

logger = config.get_logger(__name__)

PROMPT_TEMPLATE = (
    "You are a helpful assistant that answers questions about PDF documents.\n"
    "Answer the question based solely on the provided context. "
    "If the answer cannot be found in the context, say so clearly.\n"
    "Be specific and cite page numbers when referencing information.\n\n"
    "Context:\n"
    "{context}\n\n"
    "Question: {query}\n\n"
    "Answer:"
)


def build_prompt(context: str, query: str) -> str:
    """Render the fixed instruction template around context and query."""
    return PROMPT_TEMPLATE.format(context=context, query=query)


class Generator(Protocol):
    """Text-in, text-out model collaborator."""

    def generate(self, prompt: str) -> str: ...


class OpenAIChatGenerator:
    """Answers prompts with an OpenAI chat completion model."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize the generator.

        Args:
            api_key: OpenAI API key. If None, reads from OPENAI_API_KEY.
            model: Chat model name. If None, uses config.CHAT_MODEL.
            timeout: Request timeout in seconds. If None, uses config.CHAT_TIMEOUT.
        """
        api_key = api_key or config.get_openai_api_key()
        default_headers = config.get_api_headers()
        client_kwargs = {
            "api_key": api_key,
            "base_url": config.OPENAI_BASE_URL,
            "default_headers": default_headers or None,
        }
        self.client = OpenAI(**client_kwargs)
        self.async_client = AsyncOpenAI(**client_kwargs)
        self.model = model or config.CHAT_MODEL
        self.timeout = timeout if timeout is not None else config.CHAT_TIMEOUT

    def _request(self, prompt: str) -> dict:
        return {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "max_tokens": config.CHAT_MAX_TOKENS,
            "temperature": config.CHAT_TEMPERATURE,
            "timeout": self.timeout,
        }

    @staticmethod
    def _answer_text(response) -> str:  # noqa: ANN001
        content = response.choices[0].message.content if response.choices else None
        if not content or not content.strip():
            msg = "Model returned an empty response"
            raise ModelFailureError(msg)
        return content.strip()

    def generate(self, prompt: str) -> str:
        """Run one chat completion.

        Returns:
            str: The stripped model answer.

        Raises:
            ModelFailureError: On API errors, timeouts or an empty completion.
        """
        try:
            response = self.client.chat.completions.create(**self._request(prompt))
        except openai.OpenAIError as e:
            logger.exception("Chat completion failed")
            msg = f"Model call failed: {e}"
            raise ModelFailureError(msg) from e
        return self._answer_text(response)

    async def agenerate(self, prompt: str) -> str:
        """Async form of :meth:`generate`; cancelling it aborts the request."""
        try:
            response = await self.async_client.chat.completions.create(
                **self._request(prompt)
            )
        except openai.OpenAIError as e:
            logger.exception("Chat completion failed")
            msg = f"Model call failed: {e}"
            raise ModelFailureError(msg) from e
        return self._answer_text(response)
