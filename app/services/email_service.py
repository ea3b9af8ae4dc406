"""
Outbound email over SMTP.

smtplib is blocking, so sends run in the threadpool; the SMTP timeout is the
only time limit on delivery.
"""

import smtplib
from email.message import EmailMessage

import structlog
from fastapi.concurrency import run_in_threadpool

from app.config import Settings, settings
from app.core.exceptions import UpstreamError

logger = structlog.get_logger(__name__)


class EmailSender:
    """Sends plain-text mail through the configured SMTP server."""

    def __init__(self, config: Settings):
        self.config = config

    def _build_message(self, to: str, subject: str, body: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.config.EMAIL_FROM or self.config.SMTP_USER
        message["To"] = to
        message["Subject"] = subject
        message.set_content(body)
        return message

    def _send_sync(self, message: EmailMessage) -> None:
        with smtplib.SMTP(
            self.config.SMTP_HOST, self.config.SMTP_PORT, timeout=self.config.SMTP_TIMEOUT
        ) as server:
            if self.config.SMTP_USE_TLS:
                server.starttls()
            if self.config.SMTP_USER:
                server.login(self.config.SMTP_USER, self.config.SMTP_PASSWORD)
            server.send_message(message)

    async def send(self, to: str, subject: str, body: str) -> None:
        """Deliver one message; raises UpstreamError when the server refuses or is unreachable."""
        message = self._build_message(to, subject, body)
        try:
            await run_in_threadpool(self._send_sync, message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error("email_send_failed", to=to, subject=subject, error=str(e))
            raise UpstreamError("Error sending email", details={"email": str(e)})

        logger.info("email_sent", to=to, subject=subject)


def password_reset_email(temporary_password: str, expire_minutes: int) -> tuple:
    """Subject and body of the temporary password email."""
    subject = "Password Reset Request"
    body = (
        "You requested a password reset.\n\n"
        f"Your temporary password is: {temporary_password}\n\n"
        f"It expires in {expire_minutes} minutes. Log in with it and change your password."
    )
    return subject, body


_email_sender = EmailSender(settings)


def get_email_sender() -> EmailSender:
    """FastAPI dependency returning the SMTP sender."""
    return _email_sender
