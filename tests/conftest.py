"""Pytest fixtures and shared test configuration.

Fixtures:
    - app_config: Service configuration rooted in a temporary directory
    - mail_config: Mail configuration with dummy credentials
    - mailer: Recording mail sender used instead of SMTP
    - app / async_client: Application and HTTPX client for API testing
    - make_pdf / make_xlsx: Builders for sample documents
"""

import io
from collections.abc import AsyncGenerator, Callable, Sequence
from pathlib import Path
from typing import Any

import openpyxl
import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from reportlab.pdfgen import canvas

from src.api import create_app
from src.config import AppConfig
from src.delivery.config import MailConfig
from src.models.schemas import OutgoingEmail


class RecordingMailer:
    """Mail sender that records emails instead of talking to SMTP.

    Attachments are read at send time, since the file on disk is
    scheduled for deletion afterwards.
    """

    def __init__(self, config: MailConfig, error: Exception | None = None) -> None:
        self.config = config
        self.error = error
        self.sent: list[OutgoingEmail] = []
        self.attachments: list[bytes] = []
        self.verified = 0

    async def send(self, email: OutgoingEmail) -> str:
        if self.error is not None:
            raise self.error
        self.sent.append(email)
        self.attachments.append(email.attachment_path.read_bytes())
        return f"<test-{len(self.sent)}@example.com>"

    async def verify(self) -> bool:
        self.verified += 1
        return True


def files_in(directory: Path) -> list[Path]:
    """List files in a directory, treating a missing directory as empty."""
    if not directory.exists():
        return []
    return sorted(p for p in directory.iterdir() if p.is_file())


@pytest.fixture
def app_config(tmp_path: Path) -> AppConfig:
    """Return configuration writing into a temporary directory.

    Args:
        tmp_path: Per-test temporary directory.

    Returns:
        AppConfig with transport verification disabled.
    """
    return AppConfig(
        upload_dir=tmp_path / "uploads",
        output_dir=tmp_path / "converted",
        retention_seconds=60.0,
        host="127.0.0.1",
        port=3000,
        verify_transport=False,
        debug=False,
    )


@pytest.fixture
def mail_config() -> MailConfig:
    """Return mail configuration with dummy credentials."""
    return MailConfig(
        sender="converter@example.com",
        password="app-secret",
        smtp_host="smtp.example.com",
        smtp_port=465,
        use_ssl=True,
        timeout=5.0,
    )


@pytest.fixture
def mailer(mail_config: MailConfig) -> RecordingMailer:
    """Return a recording mail sender."""
    return RecordingMailer(mail_config)


@pytest.fixture
async def app(app_config: AppConfig, mailer: RecordingMailer) -> AsyncGenerator[FastAPI]:
    """Create the application and cancel its scheduled deletions afterwards.

    Yields:
        Configured FastAPI application.
    """
    application = create_app(app_config, mailer)
    yield application
    await application.state.cleanup.shutdown()


@pytest.fixture
async def async_client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def make_pdf() -> Callable[[Sequence[str]], bytes]:
    """Return a builder for single-page PDFs with one text line per entry."""

    def build(lines: Sequence[str]) -> bytes:
        buffer = io.BytesIO()
        pdf = canvas.Canvas(buffer)
        y = 800
        for line in lines:
            pdf.drawString(72, y, line)
            y -= 18
        pdf.showPage()
        pdf.save()
        return buffer.getvalue()

    return build


@pytest.fixture
def make_xlsx() -> Callable[..., bytes]:
    """Return a builder for workbooks.

    The builder takes a list of (title, rows) pairs in declared sheet order.
    """

    def build(sheets: Sequence[tuple[str, Sequence[Sequence[Any]]]]) -> bytes:
        workbook = openpyxl.Workbook()
        workbook.remove(workbook.active)
        for title, rows in sheets:
            sheet = workbook.create_sheet(title)
            for row in rows:
                sheet.append(list(row))
        buffer = io.BytesIO()
        workbook.save(buffer)
        return buffer.getvalue()

    return build
