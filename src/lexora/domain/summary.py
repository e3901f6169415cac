"""Summary domain entity."""

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any

MAX_TITLE_LENGTH = 300


@dataclass(frozen=True)
class Summary:
    """Represents one persisted summarization result as seen by clients."""

    id: int
    owner_id: int
    title: str
    original_content: str
    prompt: str
    summary_text: str
    share_id: str
    created_at: datetime | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "Summary":
        """Create Summary from a camelCase API payload."""
        created_at = data.get("createdAt")
        return cls(
            id=data["id"],
            owner_id=data.get("ownerId", 0),
            title=data.get("title", ""),
            original_content=data.get("originalContent", ""),
            prompt=data.get("prompt", ""),
            summary_text=data.get("summaryText", ""),
            share_id=data.get("shareId", ""),
            created_at=datetime.fromisoformat(created_at) if created_at else None,
        )

    def with_title(self, title: str) -> "Summary":
        return replace(self, title=title)

    def with_text(self, summary_text: str) -> "Summary":
        return replace(self, summary_text=summary_text)

    def matches(self, term: str) -> bool:
        """Case-insensitive substring match over title, prompt and text."""
        needle = term.lower()
        return any(
            needle in field.lower()
            for field in (self.title, self.prompt, self.summary_text)
        )


def build_share_url(origin: str, share_id: str) -> str:
    """Public, unauthenticated link to a summary."""
    return f"{origin.rstrip('/')}/summary/{share_id}"
