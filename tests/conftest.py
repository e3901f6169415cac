"""Pytest configuration and fixtures."""

from collections.abc import AsyncGenerator
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from lexora.infrastructure.database import get_session
from lexora.infrastructure.gmail_client import get_gmail_client
from lexora.infrastructure.llm_client import get_llm_client
from lexora.infrastructure.models import Base, UserModel
from lexora.main import app
from lexora.repositories.user_repo import UserRepository

ALICE_TOKEN = "alice-session-token"
BOB_TOKEN = "bob-session-token"


@pytest.fixture
async def test_engine(tmp_path):
    """Create test database engine (SQLite file per test)."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create test database session."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def alice(test_session) -> UserModel:
    user = await UserRepository(test_session).upsert_from_identity(
        email="alice@example.com",
        session_token=ALICE_TOKEN,
        display_name="Alice",
        google_access_token="alice-google-token",
    )
    await test_session.commit()
    return user


@pytest.fixture
async def bob(test_session) -> UserModel:
    user = await UserRepository(test_session).upsert_from_identity(
        email="bob@example.com",
        session_token=BOB_TOKEN,
        display_name="Bob",
    )
    await test_session.commit()
    return user


@pytest.fixture
def fake_llm() -> MagicMock:
    """LLM collaborator whose ``complete`` is an AsyncMock."""
    llm = MagicMock()
    llm.complete = AsyncMock(return_value="A generated response")
    return llm


@pytest.fixture
def fake_mailer() -> MagicMock:
    mailer = MagicMock()
    mailer.send = AsyncMock(return_value="gmail-message-id")
    return mailer


@pytest.fixture
async def client(session_factory, fake_llm, fake_mailer) -> AsyncGenerator[AsyncClient, None]:
    """Create async test client wired to the test database and fakes."""

    async def override_get_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_llm_client] = lambda: fake_llm
    app.dependency_overrides[get_gmail_client] = lambda: fake_mailer

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
