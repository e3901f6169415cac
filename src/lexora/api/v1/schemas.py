"""Pydantic schemas for API request/response models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema serialized with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class SummaryResponse(CamelModel):
    """Response schema for a summary record."""

    id: int
    owner_id: int
    title: str
    original_content: str
    prompt: str
    summary_text: str
    share_id: str
    created_at: datetime


class RenameRequest(CamelModel):
    """Request to rename a summary."""

    title: str = ""


class SaveTextRequest(CamelModel):
    """Request to persist refined summary text."""

    summary_text: str = ""


class RefineRequest(CamelModel):
    """Request to refine summary text without saving it."""

    current_summary: str = ""
    refinement_prompt: str = ""


class RefineResponse(CamelModel):
    """Refined text, not yet persisted."""

    refined_text: str


class ShareRequest(CamelModel):
    """Request to email summary text."""

    summary: str = ""
    recipient: str = ""


class MessageResponse(CamelModel):
    """Simple confirmation message."""

    message: str


class PromptResponse(CamelModel):
    """Response schema for a prompt template."""

    id: int
    owner_id: int | None
    title: str
    prompt_text: str


class PromptCreateRequest(CamelModel):
    """Request to save a custom prompt template."""

    title: str = ""
    prompt_text: str = ""
