"""Summarization orchestration: title, summary, persistence."""

import logging

from lexora.config import get_settings
from lexora.domain.errors import AIGenerationFailed, MissingInput, TitleGenerationFailed
from lexora.domain.summary import MAX_TITLE_LENGTH
from lexora.infrastructure.llm_client import LLMClient, get_llm_client
from lexora.infrastructure.models import SummaryModel
from lexora.repositories.summary_repo import SummaryRepository

logger = logging.getLogger(__name__)
settings = get_settings()

TITLE_INSTRUCTIONS = "You are an expert at creating short, descriptive titles."

TITLE_PROMPT = """Analyze the following text and create a concise title for it, \
no more than 7 words. Reply with the title only.

Text: "{text}\""""

SUMMARY_INSTRUCTIONS = "You are a helpful assistant that summarizes meeting transcripts."

SUMMARY_PROMPT = """Instruction: "{prompt}"

Transcript: "{transcript}\""""


def clean_title(raw: str) -> str:
    """Strip quotes and whitespace from a model-produced title."""
    return raw.replace('"', "").strip()


class SummarizationService:
    """Runs one summarization request end to end.

    The title call is best effort and falls back to a default title. The
    summary call is mandatory; if it fails nothing is persisted.
    """

    def __init__(
        self,
        summary_repo: SummaryRepository,
        llm: LLMClient | None = None,
    ) -> None:
        """Initialize the orchestrator."""
        self.summary_repo = summary_repo
        self.llm = llm or get_llm_client()

    async def generate_title(self, transcript: str) -> str:
        """Ask the model for a short title from the start of the transcript.

        Raises:
            TitleGenerationFailed: on any model error, or an empty or overlong title
        """
        excerpt = transcript[: settings.title_source_chars]
        try:
            raw = await self.llm.complete(
                model=settings.title_model,
                instructions=TITLE_INSTRUCTIONS,
                prompt=TITLE_PROMPT.format(text=excerpt),
            )
        except Exception as e:
            raise TitleGenerationFailed(str(e)) from e

        title = clean_title(raw)
        if not title:
            raise TitleGenerationFailed("Model returned an empty title")
        if len(title) > MAX_TITLE_LENGTH:
            raise TitleGenerationFailed(f"Model returned a {len(title)}-character title")
        return title

    async def generate_summary_text(self, transcript: str, prompt: str) -> str:
        """Produce the summary text for the full transcript.

        Raises:
            AIGenerationFailed: on any model error or empty output
        """
        try:
            text = await self.llm.complete(
                model=settings.summarization_model,
                instructions=SUMMARY_INSTRUCTIONS,
                prompt=SUMMARY_PROMPT.format(prompt=prompt, transcript=transcript),
            )
        except Exception as e:
            logger.error(f"Summary generation failed: {e}")
            raise AIGenerationFailed() from e

        if not text:
            logger.error("Summary generation returned no text")
            raise AIGenerationFailed()
        return text

    async def summarize(self, transcript: str, prompt: str, owner_id: int) -> SummaryModel:
        """Generate and persist a summary for the given owner."""
        if not transcript or not transcript.strip() or not prompt or not prompt.strip():
            raise MissingInput()

        try:
            title = await self.generate_title(transcript)
        except TitleGenerationFailed as e:
            logger.warning(f"Could not generate AI title, using default: {e}")
            title = settings.default_title

        summary_text = await self.generate_summary_text(transcript, prompt)

        summary = await self.summary_repo.create(
            owner_id=owner_id,
            title=title,
            original_content=transcript,
            prompt=prompt,
            summary_text=summary_text,
        )
        logger.info(f"Created summary {summary.id} for user {owner_id} ({summary.share_id})")
        return summary
