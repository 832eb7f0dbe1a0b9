"""
Verification email delivery.

With SMTP_HOST unset (development, tests) the verification link is only
written to the log. Sending runs in a worker thread because smtplib blocks.
"""

import asyncio
import smtplib
from email.message import EmailMessage
from urllib.parse import urlencode

from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)

SMTP_TIMEOUT_SECONDS = 10


class Mailer:
    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        username: str | None = None,
        password: str | None = None,
        sender: str | None = None,
        base_url: str | None = None,
    ):
        self.host = settings.SMTP_HOST if host is None else host
        self.port = port or settings.SMTP_PORT
        self.username = settings.SMTP_USERNAME if username is None else username
        self.password = settings.SMTP_PASSWORD if password is None else password
        self.sender = sender or settings.SMTP_SENDER
        self.base_url = (base_url or settings.PUBLIC_BASE_URL).rstrip("/")

    def verification_link(self, token: str) -> str:
        return f"{self.base_url}/api/verify-email?{urlencode({'token': token})}"

    async def send_verification(self, email: str, username: str, token: str) -> None:
        link = self.verification_link(token)

        if not self.host:
            logger.info("SMTP not configured; verification link for %s: %s", username, link)
            return

        message = EmailMessage()
        message["Subject"] = "Verify your email address"
        message["From"] = self.sender
        message["To"] = email
        message.set_content(
            f"Hi {username},\n\nConfirm your email address by opening this link "
            f"within {settings.EMAIL_TOKEN_EXPIRE_MINUTES} minutes:\n\n{link}\n"
        )

        await asyncio.to_thread(self._deliver, message)
        logger.info("Verification email sent to %s", username)

    def _deliver(self, message: EmailMessage) -> None:
        with smtplib.SMTP(self.host, self.port, timeout=SMTP_TIMEOUT_SECONDS) as smtp:
            if self.username:
                smtp.starttls()
                smtp.login(self.username, self.password)
            smtp.send_message(message)
