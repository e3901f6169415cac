"""Stateless refinement of existing summary text."""

import logging

from lexora.config import get_settings
from lexora.domain.errors import MissingInput, RefinementFailed
from lexora.infrastructure.llm_client import LLMClient, get_llm_client

logger = logging.getLogger(__name__)
settings = get_settings()

REFINE_INSTRUCTIONS = (
    "You revise meeting summaries. Apply the user's request to the summary "
    "and reply with the full revised summary only."
)

REFINE_PROMPT = """Request: "{instruction}"

Current summary:
{summary}"""


class RefinementService:
    """Revises summary text on request. Never touches the summary store."""

    def __init__(self, llm: LLMClient | None = None) -> None:
        self.llm = llm or get_llm_client()

    async def refine(self, current_summary: str, instruction: str) -> str:
        if not current_summary or not instruction or not instruction.strip():
            raise MissingInput("Current summary and refinement prompt are required.")

        try:
            refined = await self.llm.complete(
                model=settings.refinement_model,
                instructions=REFINE_INSTRUCTIONS,
                prompt=REFINE_PROMPT.format(instruction=instruction, summary=current_summary),
            )
        except Exception as e:
            logger.error(f"Refinement failed: {e}")
            raise RefinementFailed() from e

        if not refined:
            raise RefinementFailed()
        return refined
