"""Mail transport configuration with environment variable loading.

The sender identity and credentials are injected into the delivery service
at construction instead of being read from the environment at send time.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_SUBJECT = "Your Converted File"
DEFAULT_BODY = "Here is your converted file."


class MailConfig(BaseModel):
    """Configuration for the SMTP delivery service.

    Attributes:
        sender: Address emails are sent from; also the SMTP login.
        password: SMTP password or app secret.
        smtp_host: SMTP server hostname.
        smtp_port: SMTP server port.
        use_ssl: Connect with implicit TLS; STARTTLS is used otherwise.
        timeout: Socket timeout in seconds.
        subject: Subject line of every delivery.
        body: Plain-text body of every delivery.
    """

    sender: str = Field(
        default_factory=lambda: os.getenv("EMAIL_USER", ""),
        description="Sender address and SMTP username",
    )
    password: str = Field(
        default_factory=lambda: os.getenv("EMAIL_PASS", ""),
        description="SMTP password",
        repr=False,
    )
    smtp_host: str = Field(default_factory=lambda: os.getenv("SMTP_HOST", "smtp.gmail.com"))
    smtp_port: int = Field(
        default_factory=lambda: int(os.getenv("SMTP_PORT", "465")),
        ge=1,
        le=65535,
    )
    use_ssl: bool = Field(
        default_factory=lambda: os.getenv("SMTP_USE_SSL", "true").strip().lower()
        in {"1", "true", "yes", "on"},
    )
    timeout: float = Field(
        default_factory=lambda: float(os.getenv("SMTP_TIMEOUT", "30")),
        gt=0.0,
    )
    subject: str = DEFAULT_SUBJECT
    body: str = DEFAULT_BODY

    @field_validator("sender")
    @classmethod
    def validate_sender(cls, v: str) -> str:
        """Validate that a sender address is provided."""
        if not v or not v.strip():
            raise ValueError("EMAIL_USER is required. Set it in .env")
        return v.strip()

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        """Validate that an SMTP password is provided."""
        if not v or not v.strip():
            raise ValueError("EMAIL_PASS is required. Set it in .env")
        return v


def get_mail_config() -> MailConfig:
    """Create mail configuration from environment.

    Returns:
        Configured MailConfig instance.

    Raises:
        ValueError: If EMAIL_USER or EMAIL_PASS is not set.
    """
    return MailConfig()
