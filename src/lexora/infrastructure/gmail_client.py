"""Gmail REST API client for sending mail as the signed-in user."""

import base64
import logging
from email.message import EmailMessage

import aiohttp
from aiohttp import ClientTimeout

from lexora.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()


class MailSendError(RuntimeError):
    """Raised when the Gmail API rejects or fails a send."""


class MailAuthExpired(MailSendError):
    """Raised when Gmail rejects the access token (HTTP 401)."""


def build_raw_message(sender: str, recipient: str, subject: str, body: str) -> str:
    """Build an RFC 2822 message encoded as unpadded base64url."""
    message = EmailMessage()
    message["From"] = sender
    message["To"] = recipient
    message["Subject"] = subject
    message.set_content(body)
    return base64.urlsafe_b64encode(message.as_bytes()).decode("ascii").rstrip("=")


class GmailClient:
    """Async client for the Gmail ``users.messages.send`` endpoint.

    No retries: a failed send is reported to the caller once. Renewing
    an expired access token is left to the caller.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout_seconds: int | None = None,
        token_url: str | None = None,
    ) -> None:
        """Initialize Gmail client.

        Args:
            base_url: Gmail API base URL (defaults to config)
            timeout_seconds: Request timeout in seconds
            token_url: OAuth token endpoint used to renew access tokens
        """
        self.base_url = base_url or settings.gmail_api_base_url
        self.token_url = token_url or settings.google_token_url
        self.timeout = ClientTimeout(
            total=timeout_seconds or settings.mail_timeout_seconds
        )
        self._session: aiohttp.ClientSession | None = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create aiohttp session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self.timeout)
        return self._session

    async def close(self) -> None:
        """Close the aiohttp session."""
        if self._session and not self._session.closed:
            await self._session.close()

    async def send(
        self,
        access_token: str,
        sender: str,
        recipient: str,
        subject: str,
        body: str,
    ) -> str:
        """Send one message and return the Gmail message id.

        Raises:
            MailAuthExpired: the access token was rejected
            MailSendError: on other non-2xx responses or transport failures
        """
        url = f"{self.base_url}/users/me/messages/send"
        payload = {"raw": build_raw_message(sender, recipient, subject, body)}
        headers = {"Authorization": f"Bearer {access_token}"}

        session = await self._get_session()
        try:
            async with session.post(url, json=payload, headers=headers) as response:
                if response.status == 401:
                    logger.warning("Gmail rejected the access token")
                    raise MailAuthExpired("HTTP 401")
                if response.status >= 300:
                    detail = await response.text()
                    logger.error(f"Gmail send failed with HTTP {response.status}: {detail}")
                    raise MailSendError(f"HTTP {response.status}")
                data = await response.json()
        except TimeoutError as e:
            raise MailSendError("Timed out sending mail") from e
        except aiohttp.ClientError as e:
            raise MailSendError(str(e)) from e

        message_id = data.get("id", "")
        logger.info(f"Sent summary email to {recipient} (message {message_id})")
        return message_id

    async def refresh_access_token(self, refresh_token: str) -> str:
        """Exchange a refresh token for a new access token.

        Raises:
            MailSendError: the token endpoint refused or could not be reached
        """
        form = {
            "client_id": settings.google_client_id,
            "client_secret": settings.google_client_secret,
            "refresh_token": refresh_token,
            "grant_type": "refresh_token",
        }

        session = await self._get_session()
        try:
            async with session.post(self.token_url, data=form) as response:
                if response.status >= 300:
                    detail = await response.text()
                    logger.error(f"Token refresh failed with HTTP {response.status}: {detail}")
                    raise MailSendError(f"Token refresh failed with HTTP {response.status}")
                data = await response.json()
        except TimeoutError as e:
            raise MailSendError("Timed out refreshing access token") from e
        except aiohttp.ClientError as e:
            raise MailSendError(str(e)) from e

        access_token = data.get("access_token")
        if not access_token:
            raise MailSendError("Token endpoint returned no access token")
        return access_token


_gmail_client: GmailClient | None = None


def get_gmail_client() -> GmailClient:
    """Get the process-wide Gmail client."""
    global _gmail_client
    if _gmail_client is None:
        _gmail_client = GmailClient()
    return _gmail_client
