from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, field_validator


class ConversionState(str, Enum):
    """Pipeline states a conversion request moves through."""

    VALIDATING = "validating"
    EXTRACTING = "extracting"
    UNSUPPORTED = "unsupported"
    EXTRACT_FAILED = "extract_failed"
    EXTRACTED = "extracted"
    SYNTHESIZING = "synthesizing"
    SYNTHESIS_FAILED = "synthesis_failed"
    SYNTHESIZED = "synthesized"
    DELIVERING = "delivering"
    DELIVERED = "delivered"
    DELIVERY_FAILED = "delivery_failed"
    FAILED = "failed"


class UploadedFile(BaseModel):
    """A received upload stored at a server-chosen temporary path.

    Attributes:
        original_name: Filename as sent by the client.
        temp_path: Where the bytes were written.
        extension: Lower-cased extension of the original name, with the dot.
    """

    original_name: str
    temp_path: Path
    extension: str

    @field_validator("extension")
    @classmethod
    def lower_extension(cls, v: str) -> str:
        """Normalize the extension to lower case."""
        return v.lower()

    @property
    def base_name(self) -> str:
        """Original filename without directory or extension."""
        return Path(self.original_name).stem


class ConversionRequest(BaseModel):
    """A single conversion job, alive for the duration of one HTTP request.

    Attributes:
        request_id: Collision-resistant identifier used in output paths.
        email: Destination address.
        uploaded_file: The stored upload.
        state: Current pipeline state.
    """

    request_id: str
    email: str
    uploaded_file: UploadedFile
    state: ConversionState = ConversionState.VALIDATING


class ExtractedContent(BaseModel):
    """Newline-delimited text pulled out of an upload.

    Attributes:
        text: The extracted text.
        source_type: Which extractor produced it ("pdf" or "spreadsheet").
    """

    text: str
    source_type: str

    @property
    def lines(self) -> list[str]:
        return self.text.split("\n")


class ConversionOutcome(BaseModel):
    """Result of a pipeline run that did not raise.

    Attributes:
        state: Terminal state (DELIVERED or UNSUPPORTED).
        message: Client-facing message.
        output_path: The generated document, when one was delivered.
        message_id: Message-ID of the sent email, when one was sent.
    """

    state: ConversionState
    message: str
    output_path: Path | None = None
    message_id: str | None = None


class OutgoingEmail(BaseModel):
    """An email carrying the generated document.

    Attributes:
        sender: Fixed service identity.
        recipient: Address supplied with the upload.
        subject: Fixed subject line.
        body: Fixed plain-text body.
        attachment_path: Generated document on disk.
        attachment_name: Filename presented to the recipient.
    """

    sender: str
    recipient: str
    subject: str
    body: str
    attachment_path: Path
    attachment_name: str = Field(..., min_length=1)


class ConvertResponse(BaseModel):
    """JSON body returned by POST /convert.

    Attributes:
        message: Outcome headline.
        error: Underlying error text, for failures.
        details: Extra diagnostics, only in debug mode.
    """

    message: str
    error: str | None = None
    details: str | None = None
