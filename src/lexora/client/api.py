"""Async REST client for the Lexora API."""

import logging
from typing import Any

import aiohttp
from aiohttp import ClientTimeout

from lexora.domain.prompt import PromptTemplate
from lexora.domain.summary import Summary
from lexora.domain.transcript import PastedTranscript, TranscriptSource, UploadedTranscript

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """A request failed; ``message`` is safe to show to the user."""

    def __init__(self, status: int, message: str) -> None:
        self.status = status
        self.message = message
        super().__init__(f"HTTP {status}: {message}")


class LexoraAPIClient:
    """Async client for the Lexora REST API.

    Every call is a single attempt; failures raise ``ApiError`` and the
    user decides whether to retry.
    """

    def __init__(
        self,
        base_url: str,
        session_token: str | None = None,
        timeout_seconds: int = 120,
    ) -> None:
        """Initialize API client.

        Args:
            base_url: Server origin, e.g. ``https://lexora.example``
            session_token: Bearer token issued at login
            timeout_seconds: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.session_token = session_token
        self.timeout = ClientTimeout(total=timeout_seconds)
        self._session: aiohttp.ClientSession | None = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    async def close(self) -> None:
        """Close the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    def _headers(self, authenticated: bool) -> dict[str, str]:
        if authenticated and self.session_token:
            return {"Authorization": f"Bearer {self.session_token}"}
        return {}

    async def _request(
        self,
        method: str,
        path: str,
        authenticated: bool = True,
        **kwargs: Any,
    ) -> Any:
        url = f"{self.base_url}{path}"
        session = await self._get_session()
        try:
            async with session.request(
                method, url, headers=self._headers(authenticated), **kwargs
            ) as response:
                if response.status >= 400:
                    raise ApiError(response.status, await self._error_message(response))
                return await response.json()
        except TimeoutError as e:
            logger.warning(f"Timeout on {method} {path}")
            raise ApiError(504, "The request timed out.") from e
        except aiohttp.ClientError as e:
            logger.warning(f"Client error on {method} {path}: {e}")
            raise ApiError(503, "Could not reach the server.") from e

    @staticmethod
    async def _error_message(response: aiohttp.ClientResponse) -> str:
        try:
            data = await response.json(content_type=None)
        except ValueError:
            return response.reason or f"HTTP {response.status}"
        if isinstance(data, dict):
            return str(data.get("error") or data.get("detail") or response.reason)
        return response.reason or f"HTTP {response.status}"

    # --- Summaries ---

    async def list_summaries(self) -> list[Summary]:
        data = await self._request("GET", "/api/summaries")
        return [Summary.from_api(item) for item in data]

    async def get_shared_summary(self, share_id: str) -> Summary:
        data = await self._request("GET", f"/api/summaries/{share_id}", authenticated=False)
        return Summary.from_api(data)

    async def summarize(self, source: TranscriptSource, prompt: str) -> Summary:
        """Submit a transcript for summarization as multipart form data."""
        form = aiohttp.FormData()
        form.add_field("prompt", prompt)
        if isinstance(source, UploadedTranscript):
            form.add_field(
                "file",
                source.data,
                filename=source.filename,
                content_type=source.media_type,
            )
        elif isinstance(source, PastedTranscript):
            form.add_field("transcript", source.text)
        data = await self._request("POST", "/api/summarize", data=form)
        return Summary.from_api(data)

    async def rename_summary(self, summary_id: int, title: str) -> Summary:
        data = await self._request("PATCH", f"/api/summaries/{summary_id}", json={"title": title})
        return Summary.from_api(data)

    async def save_summary_text(self, summary_id: int, summary_text: str) -> Summary:
        data = await self._request(
            "PATCH",
            f"/api/summaries/{summary_id}/text",
            json={"summaryText": summary_text},
        )
        return Summary.from_api(data)

    async def refine_summary(self, current_summary: str, refinement_prompt: str) -> str:
        data = await self._request(
            "POST",
            "/api/summaries/refine",
            json={"currentSummary": current_summary, "refinementPrompt": refinement_prompt},
        )
        return data["refinedText"]

    async def share_by_email(self, summary_text: str, recipient: str) -> str:
        data = await self._request(
            "POST", "/api/share", json={"summary": summary_text, "recipient": recipient}
        )
        return data.get("message", "")

    # --- Prompt templates ---

    async def list_prompts(self) -> list[PromptTemplate]:
        data = await self._request("GET", "/api/prompts")
        return [PromptTemplate.from_api(item) for item in data]

    async def create_prompt(self, title: str, prompt_text: str) -> PromptTemplate:
        data = await self._request(
            "POST", "/api/prompts", json={"title": title, "promptText": prompt_text}
        )
        return PromptTemplate.from_api(data)

    async def delete_prompt(self, prompt_id: int) -> None:
        await self._request("DELETE", f"/api/prompts/{prompt_id}")
