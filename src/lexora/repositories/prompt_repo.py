"""Prompt template repository for database operations."""

import logging

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from lexora.domain.errors import NotFoundOrForbidden
from lexora.domain.prompt import DEFAULT_PROMPTS
from lexora.infrastructure.models import PromptTemplateModel

logger = logging.getLogger(__name__)


class PromptRepository:
    """Repository for default and user-owned prompt templates."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session."""
        self.session = session

    async def list_visible(self, owner_id: int) -> list[PromptTemplateModel]:
        """List defaults first, then the owner's own templates."""
        stmt = (
            select(PromptTemplateModel)
            .where(
                or_(
                    PromptTemplateModel.owner_id.is_(None),
                    PromptTemplateModel.owner_id == owner_id,
                )
            )
            .order_by(
                PromptTemplateModel.owner_id.is_not(None),
                PromptTemplateModel.id,
            )
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, owner_id: int, title: str, prompt_text: str) -> PromptTemplateModel:
        """Create a custom template owned by the caller."""
        model = PromptTemplateModel(owner_id=owner_id, title=title, prompt_text=prompt_text)
        self.session.add(model)
        await self.session.flush()
        return model

    async def delete(self, prompt_id: int, owner_id: int) -> None:
        """Delete a custom template.

        Defaults have no owner, so they never match and cannot be deleted.

        Raises:
            NotFoundOrForbidden: if missing, a default, or owned by someone else
        """
        stmt = select(PromptTemplateModel).where(
            PromptTemplateModel.id == prompt_id,
            PromptTemplateModel.owner_id == owner_id,
        )
        result = await self.session.execute(stmt)
        model = result.scalar_one_or_none()
        if model is None:
            raise NotFoundOrForbidden("Prompt not found or you do not have permission to delete it.")
        await self.session.delete(model)
        await self.session.flush()

    async def ensure_defaults(self) -> int:
        """Insert any missing built-in templates. Returns the number created."""
        stmt = select(PromptTemplateModel.title).where(PromptTemplateModel.owner_id.is_(None))
        result = await self.session.execute(stmt)
        existing = set(result.scalars().all())

        created = 0
        for title, prompt_text in DEFAULT_PROMPTS:
            if title in existing:
                continue
            self.session.add(PromptTemplateModel(owner_id=None, title=title, prompt_text=prompt_text))
            created += 1

        if created:
            await self.session.flush()
            logger.info(f"Seeded {created} default prompt templates")
        return created
