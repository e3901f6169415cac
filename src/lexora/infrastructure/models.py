"""SQLAlchemy ORM models."""

from datetime import UTC, datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship

from lexora.domain.prompt import MAX_PROMPT_TITLE_LENGTH
from lexora.domain.summary import MAX_TITLE_LENGTH


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class UserModel(Base):
    """SQLAlchemy model for users authenticated by the identity provider.

    Rows are written by the OAuth login flow. ``session_token`` is the
    bearer token presented by clients; the Google tokens are used to send
    mail from the user's own mailbox.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(320), unique=True, nullable=False)
    display_name: Mapped[str] = mapped_column(String(200), default="", nullable=False)
    session_token: Mapped[str] = mapped_column(
        String(128), unique=True, index=True, nullable=False
    )
    google_access_token: Mapped[str | None] = mapped_column(Text, nullable=True)
    google_refresh_token: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )

    summaries: Mapped[list["SummaryModel"]] = relationship(
        "SummaryModel", back_populates="owner"
    )


class SummaryModel(Base):
    """SQLAlchemy model for summaries table.

    Only ``title`` and ``summary_text`` change after creation.
    """

    __tablename__ = "summaries"
    __table_args__ = (Index("ix_summaries_owner_created", "owner_id", "created_at"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    owner_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    title: Mapped[str] = mapped_column(String(MAX_TITLE_LENGTH), nullable=False)
    original_content: Mapped[str] = mapped_column(Text, nullable=False)
    prompt: Mapped[str] = mapped_column(Text, nullable=False)
    summary_text: Mapped[str] = mapped_column(Text, nullable=False)
    share_id: Mapped[str] = mapped_column(
        String(32), unique=True, index=True, nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )

    owner: Mapped["UserModel"] = relationship("UserModel", back_populates="summaries")


class PromptTemplateModel(Base):
    """SQLAlchemy model for prompt templates.

    ``owner_id`` is NULL for built-in defaults.
    """

    __tablename__ = "prompt_templates"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    owner_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True
    )
    title: Mapped[str] = mapped_column(String(MAX_PROMPT_TITLE_LENGTH), nullable=False)
    prompt_text: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=_utcnow, nullable=False
    )
