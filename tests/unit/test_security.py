"""Tests for bearer-token authentication."""

import pytest
from fastapi.security import HTTPAuthorizationCredentials

from lexora.api.dependencies import get_current_user
from lexora.domain.errors import NotAuthenticated


def _bearer(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestGetCurrentUser:
    @pytest.mark.asyncio
    async def test_missing_credentials(self, test_session):
        with pytest.raises(NotAuthenticated):
            await get_current_user(session=test_session, credentials=None)

    @pytest.mark.asyncio
    async def test_unknown_token(self, test_session, alice):
        with pytest.raises(NotAuthenticated):
            await get_current_user(session=test_session, credentials=_bearer("forged"))

    @pytest.mark.asyncio
    async def test_valid_token_resolves_user(self, test_session, alice):
        user = await get_current_user(
            session=test_session, credentials=_bearer("alice-session-token")
        )
        assert user.email == "alice@example.com"


class TestUpsertFromIdentity:
    @pytest.mark.asyncio
    async def test_relogin_rotates_token_and_keeps_refresh_token(self, test_session):
        from lexora.repositories.user_repo import UserRepository

        repo = UserRepository(test_session)
        first = await repo.upsert_from_identity(
            email="dana@example.com",
            session_token="t1",
            google_access_token="a1",
            google_refresh_token="r1",
        )
        second = await repo.upsert_from_identity(
            email="dana@example.com", session_token="t2", google_access_token="a2"
        )

        assert second.id == first.id
        assert second.session_token == "t2"
        assert second.google_refresh_token == "r1"
        assert await repo.get_by_session_token("t1") is None
