"""Prompt template domain entity."""

from dataclasses import dataclass
from typing import Any

MAX_PROMPT_TITLE_LENGTH = 200


@dataclass(frozen=True)
class PromptTemplate:
    """Reusable summarization instruction.

    Built-in defaults have no owner and are visible to everyone.
    """

    id: int
    title: str
    prompt_text: str
    owner_id: int | None = None

    @property
    def is_default(self) -> bool:
        return self.owner_id is None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "PromptTemplate":
        """Create PromptTemplate from a camelCase API payload."""
        return cls(
            id=data["id"],
            title=data.get("title", ""),
            prompt_text=data.get("promptText", ""),
            owner_id=data.get("ownerId"),
        )


DEFAULT_PROMPTS: list[tuple[str, str]] = [
    (
        "Executive Summary",
        "Summarize this meeting in a short executive summary of 3-5 sentences.",
    ),
    (
        "Action Items",
        "List every action item from this meeting as bullet points, "
        "with the owner and due date when mentioned.",
    ),
    (
        "Key Decisions",
        "List the key decisions made in this meeting and the reasoning behind each.",
    ),
    (
        "Detailed Notes",
        "Write detailed meeting notes in Markdown with sections for attendees, "
        "topics discussed, decisions and next steps.",
    ),
]
