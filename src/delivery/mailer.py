"""SMTP delivery of generated documents.

Sends one email per conversion with the document attached. smtplib is
blocking, so sends run in a worker thread. Transport failures are sorted
into authentication, connection and generic send failures so callers and
logs can tell them apart.
"""

import asyncio
import logging
import mimetypes
import smtplib
import ssl
from email.message import EmailMessage
from email.utils import make_msgid
from pathlib import Path
from typing import Protocol

from src.delivery.config import MailConfig
from src.exceptions import DeliveryError, DeliveryFailure
from src.models.schemas import OutgoingEmail

logger = logging.getLogger(__name__)

DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"


class MailSender(Protocol):
    """Anything able to deliver an OutgoingEmail."""

    config: MailConfig

    async def send(self, email: OutgoingEmail) -> str:
        """Send the email and return its Message-ID.

        Raises:
            DeliveryError: If the transport fails.
        """
        ...


def _attachment_type(path: Path) -> tuple[str, str]:
    if path.suffix.lower() == ".docx":
        mime = DOCX_MIME_TYPE
    else:
        mime = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
    maintype, _, subtype = mime.partition("/")
    return maintype, subtype


class EmailDeliveryService:
    """Delivers emails over SMTP using an injected MailConfig."""

    def __init__(self, config: MailConfig) -> None:
        self.config = config

    def build_message(self, email: OutgoingEmail) -> EmailMessage:
        """Assemble the MIME message with the document attached.

        Args:
            email: What to send.

        Returns:
            A ready-to-send EmailMessage with a fresh Message-ID.
        """
        message = EmailMessage()
        message["From"] = email.sender
        message["To"] = email.recipient
        message["Subject"] = email.subject
        domain = email.sender.rpartition("@")[2] or None
        message["Message-ID"] = make_msgid(domain=domain)
        message.set_content(email.body)

        maintype, subtype = _attachment_type(email.attachment_path)
        message.add_attachment(
            email.attachment_path.read_bytes(),
            maintype=maintype,
            subtype=subtype,
            filename=email.attachment_name,
        )
        return message

    def _connect(self) -> smtplib.SMTP:
        context = ssl.create_default_context()
        if self.config.use_ssl:
            return smtplib.SMTP_SSL(
                self.config.smtp_host,
                self.config.smtp_port,
                timeout=self.config.timeout,
                context=context,
            )
        smtp = smtplib.SMTP(self.config.smtp_host, self.config.smtp_port, timeout=self.config.timeout)
        smtp.starttls(context=context)
        return smtp

    def _deliver(self, message: EmailMessage) -> None:
        with self._connect() as smtp:
            smtp.login(self.config.sender, self.config.password)
            smtp.send_message(message)

    def _login_only(self) -> None:
        with self._connect() as smtp:
            smtp.login(self.config.sender, self.config.password)

    async def send(self, email: OutgoingEmail) -> str:
        """Send an email with its attachment.

        Args:
            email: What to send.

        Returns:
            The Message-ID of the sent email.

        Raises:
            DeliveryError: With kind AUTHENTICATION, CONNECTION or SEND.
        """
        logger.info(f"Attempting to send email to: {email.recipient}")
        message = await asyncio.to_thread(self.build_message, email)

        try:
            await asyncio.to_thread(self._deliver, message)
        except smtplib.SMTPAuthenticationError as e:
            logger.error(f"Error sending email: {e}")
            logger.error("Authentication failed. Please check your email credentials.")
            raise DeliveryError(str(e), kind=DeliveryFailure.AUTHENTICATION) from e
        except (smtplib.SMTPConnectError, smtplib.SMTPServerDisconnected) as e:
            logger.error(f"Error sending email: {e}")
            logger.error("Connection to email server failed.")
            raise DeliveryError(str(e), kind=DeliveryFailure.CONNECTION) from e
        except smtplib.SMTPException as e:
            logger.error(f"Email sending error: {e}")
            raise DeliveryError(str(e), kind=DeliveryFailure.SEND) from e
        except OSError as e:
            # Refused connections, DNS failures, TLS handshake errors, timeouts
            logger.error(f"Error sending email: {e}")
            logger.error("Connection to email server failed.")
            raise DeliveryError(str(e), kind=DeliveryFailure.CONNECTION) from e

        message_id = message["Message-ID"]
        logger.info(f"Email sent successfully: {message_id}")
        return message_id

    async def verify(self) -> bool:
        """Check that the transport accepts our credentials.

        Never raises; the outcome is logged.

        Returns:
            True if a connection and login succeeded.
        """
        try:
            await asyncio.to_thread(self._login_only)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(f"Error verifying mail transport: {e}")
            return False
        logger.info("Server is ready to send emails")
        return True
