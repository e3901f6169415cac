"""Tests for the OpenAI wrapper."""

import logging
from unittest.mock import AsyncMock, MagicMock

import pytest

from lexora.infrastructure.llm_client import LLMClient, LLMNotConfiguredError


class TestLLMClient:
    @pytest.mark.asyncio
    async def test_missing_key_raises(self, caplog):
        client = LLMClient(api_key="")

        with caplog.at_level(logging.WARNING), pytest.raises(LLMNotConfiguredError):
            await client.complete("gpt-4o-mini", "instructions", "prompt")

        assert "API key not configured" in caplog.text

    @pytest.mark.asyncio
    async def test_returns_stripped_output_text(self):
        client = LLMClient(api_key="test-key")
        client.client = MagicMock()
        client.client.responses = MagicMock()
        client.client.responses.create = AsyncMock(return_value=MagicMock(output_text="  Title \n"))

        assert await client.complete("gpt-4o-mini", "Be brief.", "Hello") == "Title"

        kwargs = client.client.responses.create.await_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["instructions"] == "Be brief."
        assert kwargs["input"] == [{"role": "user", "content": "Hello"}]

    @pytest.mark.asyncio
    async def test_sdk_errors_propagate(self):
        client = LLMClient(api_key="test-key")
        client.client = MagicMock()
        client.client.responses = MagicMock()
        client.client.responses.create = AsyncMock(side_effect=TimeoutError("slow"))

        with pytest.raises(TimeoutError):
            await client.complete("gpt-4o-mini", "i", "p")
