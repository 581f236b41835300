"""
SMTP email service.

Sends transactional email (order confirmations, ad-hoc messages from the
storefront) through the SMTP server configured in settings. The connection
is opened per message; port 465 uses implicit TLS, other ports upgrade
with STARTTLS when the server offers it. smtplib blocks, so delivery
runs in the threadpool.
"""

import logging
import smtplib
from decimal import Decimal
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr, make_msgid
from typing import Optional, Union

from fastapi.concurrency import run_in_threadpool

from shared.config import Settings

from .exceptions import DeliveryError, EmailNotConfiguredError
from .interfaces import INotificationService

logger = logging.getLogger(__name__)

SMTP_TIMEOUT_SECONDS = 15
SMTPS_PORT = 465


class SmtpEmailService(INotificationService):
    """Implementation of the notification service over smtplib."""

    def __init__(self, settings: Settings):
        self._settings = settings

    async def send_email(
        self,
        to_email: str,
        subject: str,
        message_html: str,
        to_name: Optional[str] = None,
        order_total: Optional[Union[Decimal, str]] = None,
    ) -> str:
        missing = self._settings.missing_smtp_settings()
        if missing:
            logger.error("Missing SMTP settings: %s", missing)
            raise EmailNotConfiguredError(missing)

        message = self._build_message(to_email, subject, message_html, to_name, order_total)

        try:
            await run_in_threadpool(self._deliver, message)
        except (smtplib.SMTPException, OSError, UnicodeError) as e:
            logger.error("Failed to send email to %s: %s", to_email, e)
            raise DeliveryError(smtp_error=str(e)) from e

        message_id = message["Message-ID"]
        logger.info("Email sent to %s (%s)", to_email, message_id)
        return message_id

    def _build_message(
        self,
        to_email: str,
        subject: str,
        message_html: str,
        to_name: Optional[str],
        order_total: Optional[Union[Decimal, str]],
    ) -> MIMEMultipart:
        settings = self._settings
        message = MIMEMultipart("alternative")
        message["From"] = formataddr((settings.store_name, settings.email_from))
        message["To"] = formataddr((to_name, to_email)) if to_name else to_email
        message["Subject"] = subject
        message["Message-ID"] = make_msgid()

        text = (
            f"Hello {to_name or 'Customer'},\n\n"
            f"Your purchase has been confirmed. Total: {order_total if order_total is not None else ''}."
        )
        message.attach(MIMEText(text, "plain", "utf-8"))
        message.attach(MIMEText(message_html, "html", "utf-8"))
        return message

    def _deliver(self, message: MIMEMultipart) -> None:
        settings = self._settings
        if settings.smtp_port == SMTPS_PORT:
            server = smtplib.SMTP_SSL(settings.smtp_host, settings.smtp_port, timeout=SMTP_TIMEOUT_SECONDS)
        else:
            server = smtplib.SMTP(settings.smtp_host, settings.smtp_port, timeout=SMTP_TIMEOUT_SECONDS)

        with server:
            if settings.smtp_port != SMTPS_PORT:
                server.ehlo()
                if server.has_extn("starttls"):
                    server.starttls()
                    server.ehlo()
            server.login(settings.smtp_user, settings.smtp_password)
            server.send_message(message)
