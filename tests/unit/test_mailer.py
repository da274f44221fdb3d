"""Unit tests for MailConfig and the SMTP delivery service.

smtplib is mocked; no network traffic is generated.
"""

import smtplib
from email.message import EmailMessage
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
import pytest_check as check
from pydantic import ValidationError

from src.delivery.config import MailConfig, get_mail_config
from src.delivery.mailer import DOCX_MIME_TYPE, EmailDeliveryService
from src.exceptions import DeliveryError, DeliveryFailure
from src.models.schemas import OutgoingEmail


@pytest.fixture
def outgoing(tmp_path: Path, mail_config: MailConfig) -> OutgoingEmail:
    attachment = tmp_path / "abc123-report.docx"
    attachment.write_bytes(b"PK\x03\x04 fake docx")
    return OutgoingEmail(
        sender=mail_config.sender,
        recipient="reader@example.org",
        subject=mail_config.subject,
        body=mail_config.body,
        attachment_path=attachment,
        attachment_name="report.docx",
    )


def _smtp_session(smtp_cls: MagicMock) -> MagicMock:
    return smtp_cls.return_value.__enter__.return_value


class TestMailConfig:
    """Tests for MailConfig validation."""

    def test_defaults(self) -> None:
        """Config uses Gmail over implicit TLS by default."""
        config = MailConfig(sender="a@example.com", password="pw")

        check.equal(config.smtp_host, "smtp.gmail.com")
        check.equal(config.smtp_port, 465)
        check.is_true(config.use_ssl)
        check.equal(config.subject, "Your Converted File")
        check.equal(config.body, "Here is your converted file.")

    def test_missing_sender_fails(self) -> None:
        """Config raises when the sender address is missing."""
        with pytest.raises(ValidationError) as exc_info:
            MailConfig(sender="", password="pw")

        assert "EMAIL_USER is required" in str(exc_info.value)

    def test_whitespace_password_fails(self) -> None:
        """Config rejects a whitespace-only password."""
        with pytest.raises(ValidationError) as exc_info:
            MailConfig(sender="a@example.com", password="   ")

        assert "EMAIL_PASS is required" in str(exc_info.value)

    def test_sender_is_stripped(self) -> None:
        """Leading/trailing whitespace is removed from the sender."""
        assert MailConfig(sender="  a@example.com ", password="pw").sender == "a@example.com"

    def test_password_hidden_from_repr(self) -> None:
        """The password never shows up in the repr."""
        assert "s3cret" not in repr(MailConfig(sender="a@example.com", password="s3cret"))

    def test_loads_from_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """get_mail_config reads the EMAIL_* and SMTP_* variables."""
        monkeypatch.setenv("EMAIL_USER", "env@example.com")
        monkeypatch.setenv("EMAIL_PASS", "env-secret")
        monkeypatch.setenv("SMTP_HOST", "mail.example.net")
        monkeypatch.setenv("SMTP_PORT", "587")
        monkeypatch.setenv("SMTP_USE_SSL", "false")

        config = get_mail_config()

        check.equal(config.sender, "env@example.com")
        check.equal(config.password, "env-secret")
        check.equal(config.smtp_host, "mail.example.net")
        check.equal(config.smtp_port, 587)
        check.is_false(config.use_ssl)


class TestBuildMessage:
    """Tests for MIME assembly."""

    def test_headers_and_attachment(self, mail_config: MailConfig, outgoing: OutgoingEmail) -> None:
        """The message carries the fixed texts and the named .docx attachment."""
        message = EmailDeliveryService(mail_config).build_message(outgoing)

        check.equal(message["From"], "converter@example.com")
        check.equal(message["To"], "reader@example.org")
        check.equal(message["Subject"], "Your Converted File")
        check.is_true(message["Message-ID"].endswith("@example.com>"))
        check.equal(message.get_body(("plain",)).get_content().strip(), "Here is your converted file.")

        attachments = list(message.iter_attachments())
        assert len(attachments) == 1
        check.equal(attachments[0].get_filename(), "report.docx")
        check.equal(attachments[0].get_content_type(), DOCX_MIME_TYPE)
        check.equal(attachments[0].get_content(), b"PK\x03\x04 fake docx")


class TestSend:
    """Tests for SMTP delivery and failure classification."""

    async def test_sends_over_ssl(self, mail_config: MailConfig, outgoing: OutgoingEmail) -> None:
        """Successful send logs in and returns the Message-ID."""
        with patch("src.delivery.mailer.smtplib.SMTP_SSL") as smtp_cls:
            message_id = await EmailDeliveryService(mail_config).send(outgoing)

        session = _smtp_session(smtp_cls)
        smtp_cls.assert_called_once()
        assert smtp_cls.call_args.args == ("smtp.example.com", 465)
        session.login.assert_called_once_with("converter@example.com", "app-secret")
        session.send_message.assert_called_once()
        sent: EmailMessage = session.send_message.call_args.args[0]
        assert sent["Message-ID"] == message_id

    async def test_starttls_when_ssl_disabled(
        self, mail_config: MailConfig, outgoing: OutgoingEmail
    ) -> None:
        """Plain SMTP connections are upgraded with STARTTLS."""
        config = mail_config.model_copy(update={"use_ssl": False, "smtp_port": 587})

        with patch("src.delivery.mailer.smtplib.SMTP") as smtp_cls:
            await EmailDeliveryService(config).send(outgoing)

        smtp_cls.return_value.starttls.assert_called_once()
        _smtp_session(smtp_cls).send_message.assert_called_once()

    async def test_authentication_failure(
        self, mail_config: MailConfig, outgoing: OutgoingEmail
    ) -> None:
        """Rejected credentials raise an AUTHENTICATION DeliveryError."""
        with patch("src.delivery.mailer.smtplib.SMTP_SSL") as smtp_cls:
            _smtp_session(smtp_cls).login.side_effect = smtplib.SMTPAuthenticationError(
                535, b"5.7.8 Username and Password not accepted"
            )
            with pytest.raises(DeliveryError) as exc_info:
                await EmailDeliveryService(mail_config).send(outgoing)

        assert exc_info.value.kind is DeliveryFailure.AUTHENTICATION
        assert exc_info.value.message == "Error sending email!"
        assert "535" in exc_info.value.error

    async def test_connection_refused(self, mail_config: MailConfig, outgoing: OutgoingEmail) -> None:
        """An unreachable server raises a CONNECTION DeliveryError."""
        with patch(
            "src.delivery.mailer.smtplib.SMTP_SSL",
            side_effect=ConnectionRefusedError("Connection refused"),
        ):
            with pytest.raises(DeliveryError) as exc_info:
                await EmailDeliveryService(mail_config).send(outgoing)

        assert exc_info.value.kind is DeliveryFailure.CONNECTION

    async def test_server_disconnect(self, mail_config: MailConfig, outgoing: OutgoingEmail) -> None:
        """A dropped session raises a CONNECTION DeliveryError."""
        with patch("src.delivery.mailer.smtplib.SMTP_SSL") as smtp_cls:
            _smtp_session(smtp_cls).send_message.side_effect = smtplib.SMTPServerDisconnected(
                "Connection unexpectedly closed"
            )
            with pytest.raises(DeliveryError) as exc_info:
                await EmailDeliveryService(mail_config).send(outgoing)

        assert exc_info.value.kind is DeliveryFailure.CONNECTION

    async def test_generic_send_failure(self, mail_config: MailConfig, outgoing: OutgoingEmail) -> None:
        """Other SMTP errors raise a SEND DeliveryError."""
        with patch("src.delivery.mailer.smtplib.SMTP_SSL") as smtp_cls:
            _smtp_session(smtp_cls).send_message.side_effect = smtplib.SMTPDataError(
                554, b"Message rejected"
            )
            with pytest.raises(DeliveryError) as exc_info:
                await EmailDeliveryService(mail_config).send(outgoing)

        assert exc_info.value.kind is DeliveryFailure.SEND
        assert exc_info.value.status_code == 502


class TestVerify:
    """Tests for the startup transport check."""

    async def test_verify_success(self, mail_config: MailConfig) -> None:
        """A successful login reports True."""
        with patch("src.delivery.mailer.smtplib.SMTP_SSL") as smtp_cls:
            assert await EmailDeliveryService(mail_config).verify() is True

        _smtp_session(smtp_cls).login.assert_called_once()

    async def test_verify_failure_does_not_raise(self, mail_config: MailConfig) -> None:
        """Transport problems are reported as False."""
        with patch("src.delivery.mailer.smtplib.SMTP_SSL", side_effect=OSError("unreachable")):
            assert await EmailDeliveryService(mail_config).verify() is False
