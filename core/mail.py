import logging
from dataclasses import dataclass
from email.utils import parseaddr
from typing import Optional

from fastapi_mail import ConnectionConfig, FastMail, MessageSchema, MessageType, MultipartSubtypeEnum
from pydantic import ValidationError

from core.config import Settings
from core.exceptions import MailConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SendResult:
    ok: bool
    error: Optional[BaseException] = None


class MailTransport:
    """One SMTP relay connection profile, built from settings at call time.

    Construction fails fast when the relay host or credentials are missing;
    ``send`` never raises and reports relay failures through ``SendResult``.
    """

    def __init__(self, settings: Settings):
        if not settings.SMTP_HOST or not settings.SMTP_USER or not settings.SMTP_PASS:
            raise MailConfigurationError(
                "Missing SMTP config. Set SMTP_HOST, SMTP_USER, SMTP_PASS (and optionally SMTP_PORT/SMTP_SECURE)."
            )

        from_name, from_address = parseaddr(settings.mail_sender or "")
        try:
            self.conf = ConnectionConfig(
                MAIL_USERNAME=settings.SMTP_USER,
                MAIL_PASSWORD=settings.SMTP_PASS,
                MAIL_FROM=from_address,
                MAIL_FROM_NAME=from_name or None,
                MAIL_PORT=settings.SMTP_PORT,
                MAIL_SERVER=settings.SMTP_HOST,
                MAIL_SSL_TLS=settings.SMTP_SECURE,
                MAIL_STARTTLS=not settings.SMTP_SECURE,
                USE_CREDENTIALS=True,
                VALIDATE_CERTS=True,
                SUPPRESS_SEND=int(settings.MAIL_SUPPRESS_SEND),
                TIMEOUT=settings.SMTP_TIMEOUT,
            )
        except ValidationError as e:
            raise MailConfigurationError(f"Invalid SMTP config: {e}") from e

        self.recipient = settings.CONTACT_TO_EMAIL
        self.fast_mail = FastMail(self.conf)

    async def send(self, subject: str, text: str, html: str, reply_to: str) -> SendResult:
        try:
            message = MessageSchema(
                subject=subject,
                recipients=[self.recipient],
                body=html,
                alternative_body=text,
                subtype=MessageType.html,
                multipart_subtype=MultipartSubtypeEnum.alternative,
                reply_to=[reply_to],
            )
            await self.fast_mail.send_message(message)
        except Exception as e:
            return SendResult(ok=False, error=e)

        logger.info("✅ Contact email relayed to %s via %s", self.recipient, self.conf.MAIL_SERVER)
        return SendResult(ok=True)
