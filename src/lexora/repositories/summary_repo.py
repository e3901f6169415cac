"""Summary repository for database operations."""

import logging
import secrets

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lexora.domain.errors import NotFoundOrForbidden
from lexora.infrastructure.models import SummaryModel

logger = logging.getLogger(__name__)

SHARE_ID_BYTES = 9  # 12 URL-safe characters


def generate_share_id() -> str:
    """Generate a URL-safe public share token."""
    return secrets.token_urlsafe(SHARE_ID_BYTES)


class SummaryRepository:
    """Repository for Summary persistence.

    Every mutation is scoped by owner; the share-id read is the only
    cross-user path and it is read-only.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session."""
        self.session = session

    async def list_by_owner(self, owner_id: int) -> list[SummaryModel]:
        """List an owner's summaries, newest first."""
        stmt = (
            select(SummaryModel)
            .where(SummaryModel.owner_id == owner_id)
            .order_by(SummaryModel.created_at.desc(), SummaryModel.id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_share_id(self, share_id: str) -> SummaryModel | None:
        """Get a summary by its public share id."""
        stmt = select(SummaryModel).where(SummaryModel.share_id == share_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_owned(self, summary_id: int, owner_id: int) -> SummaryModel:
        """Get a summary the caller owns.

        Raises:
            NotFoundOrForbidden: if it does not exist or belongs to someone else
        """
        stmt = select(SummaryModel).where(
            SummaryModel.id == summary_id,
            SummaryModel.owner_id == owner_id,
        )
        result = await self.session.execute(stmt)
        summary = result.scalar_one_or_none()
        if summary is None:
            raise NotFoundOrForbidden()
        return summary

    async def _unused_share_id(self) -> str:
        while True:
            share_id = generate_share_id()
            if await self.get_by_share_id(share_id) is None:
                return share_id
            logger.warning(f"Share id collision on {share_id}, regenerating")

    async def create(
        self,
        owner_id: int,
        title: str,
        original_content: str,
        prompt: str,
        summary_text: str,
    ) -> SummaryModel:
        """Persist a new summary with a fresh share id."""
        model = SummaryModel(
            owner_id=owner_id,
            title=title,
            original_content=original_content,
            prompt=prompt,
            summary_text=summary_text,
            share_id=await self._unused_share_id(),
        )
        self.session.add(model)
        await self.session.flush()
        return model

    async def rename(self, summary_id: int, owner_id: int, title: str) -> SummaryModel:
        """Update the title of an owned summary."""
        summary = await self.get_owned(summary_id, owner_id)
        summary.title = title
        await self.session.flush()
        return summary

    async def save_refined_text(
        self, summary_id: int, owner_id: int, summary_text: str
    ) -> SummaryModel:
        """Overwrite the summary text of an owned summary."""
        summary = await self.get_owned(summary_id, owner_id)
        summary.summary_text = summary_text
        await self.session.flush()
        return summary
