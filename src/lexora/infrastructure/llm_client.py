"""OpenAI Responses API client used for titles, summaries and refinements."""

import logging

from openai import AsyncOpenAI

from lexora.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


class LLMNotConfiguredError(RuntimeError):
    """Raised when no OpenAI API key is available."""


class LLMClient:
    """Thin async wrapper returning the plain text of one model response."""

    def __init__(self, api_key: str | None = None) -> None:
        """Initialize the client."""
        self.api_key = api_key if api_key is not None else settings.openai_api_key
        self.client = AsyncOpenAI(api_key=self.api_key or "unset")

    async def complete(self, model: str, instructions: str, prompt: str) -> str:
        """Run a single-turn completion and return its stripped output text.

        Errors from the OpenAI SDK propagate to the caller, which decides
        whether they are fatal.
        """
        if not self.api_key:
            logger.warning("OpenAI API key not configured")
            raise LLMNotConfiguredError("OpenAI API key not configured")

        response = await self.client.responses.create(
            model=model,
            instructions=instructions,
            input=[{"role": "user", "content": prompt}],
        )
        return response.output_text.strip()


_llm_client: LLMClient | None = None


def get_llm_client() -> LLMClient:
    """Get the process-wide LLM client."""
    global _llm_client
    if _llm_client is None:
        _llm_client = LLMClient()
    return _llm_client
