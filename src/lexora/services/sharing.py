"""Email sharing of summary text from the user's own mailbox."""

import logging

from lexora.config import get_settings
from lexora.domain.errors import DownstreamServiceFailure, MissingInput
from lexora.infrastructure.gmail_client import (
    GmailClient,
    MailAuthExpired,
    MailSendError,
    get_gmail_client,
)
from lexora.infrastructure.models import UserModel
from lexora.repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)
settings = get_settings()


class EmailShareService:
    """Sends summary text to a recipient as the authenticated user.

    An expired access token is renewed once with the user's refresh token
    and the send retried; the renewed token is stored when a user
    repository is available.
    """

    def __init__(
        self,
        mailer: GmailClient | None = None,
        user_repo: UserRepository | None = None,
    ) -> None:
        self.mailer = mailer or get_gmail_client()
        self.user_repo = user_repo

    async def share(self, user: UserModel, summary_text: str, recipient: str) -> str:
        """Send the summary; returns the provider message id.

        Raises:
            MissingInput: recipient or summary text is empty
            DownstreamServiceFailure: the mail provider failed
        """
        recipient = (recipient or "").strip()
        if not summary_text or not recipient:
            raise MissingInput("Summary and recipient are required.")

        if not user.google_access_token:
            raise DownstreamServiceFailure("Your account has no mail permission. Sign in again.")

        try:
            try:
                return await self._send(user, user.google_access_token, summary_text, recipient)
            except MailAuthExpired:
                if not user.google_refresh_token:
                    raise
                logger.info(f"Mail access token expired for user {user.id}, refreshing")
                access_token = await self._renew_access_token(user)
                return await self._send(user, access_token, summary_text, recipient)
        except MailSendError as e:
            logger.error(f"Error sending email for user {user.id}: {e}")
            raise DownstreamServiceFailure("Failed to send email.") from e

    async def _send(
        self, user: UserModel, access_token: str, summary_text: str, recipient: str
    ) -> str:
        return await self.mailer.send(
            access_token=access_token,
            sender=user.email,
            recipient=recipient,
            subject=settings.mail_subject,
            body=summary_text,
        )

    async def _renew_access_token(self, user: UserModel) -> str:
        access_token = await self.mailer.refresh_access_token(user.google_refresh_token)
        if self.user_repo is not None:
            await self.user_repo.update_access_token(user, access_token)
        else:
            user.google_access_token = access_token
        return access_token
