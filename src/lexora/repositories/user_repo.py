"""User repository for session lookups."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from lexora.infrastructure.models import UserModel


class UserRepository:
    """Repository for users written by the OAuth login flow."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session."""
        self.session = session

    async def get_by_session_token(self, token: str) -> UserModel | None:
        """Resolve a bearer token to its user."""
        stmt = select(UserModel).where(UserModel.session_token == token)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def upsert_from_identity(
        self,
        email: str,
        session_token: str,
        display_name: str = "",
        google_access_token: str | None = None,
        google_refresh_token: str | None = None,
    ) -> UserModel:
        """Insert or update a user after the identity provider signs them in."""
        stmt = select(UserModel).where(UserModel.email == email)
        result = await self.session.execute(stmt)
        existing = result.scalar_one_or_none()

        if existing:
            existing.session_token = session_token
            existing.display_name = display_name or existing.display_name
            existing.google_access_token = google_access_token
            if google_refresh_token:
                existing.google_refresh_token = google_refresh_token
            await self.session.flush()
            return existing

        model = UserModel(
            email=email,
            display_name=display_name,
            session_token=session_token,
            google_access_token=google_access_token,
            google_refresh_token=google_refresh_token,
        )
        self.session.add(model)
        await self.session.flush()
        return model

    async def update_access_token(self, user: UserModel, access_token: str) -> None:
        """Store a renewed mail access token."""
        user.google_access_token = access_token
        await self.session.flush()
