"""Error taxonomy for the conversion pipeline.

Every failure a request can hit is a ConversionError subclass. Each one
carries the headline shown to the client, the HTTP status it maps to and
the underlying error text.
"""

from enum import Enum


class ConversionError(Exception):
    """Base class for all pipeline failures.

    Attributes:
        message: Client-facing headline.
        status_code: HTTP status returned for this failure.
        error: Underlying error text.
        details: Optional extra diagnostics (tracebacks in debug mode).
    """

    message: str = "Conversion failed!"
    status_code: int = 500

    def __init__(self, error: str, *, details: str | None = None) -> None:
        super().__init__(error)
        self.error = error
        self.details = details


class UploadValidationError(ConversionError):
    """Raised when the email address or the file is missing."""

    status_code = 400


class ExtractionError(ConversionError):
    """Raised when no text or data can be extracted from the upload."""

    message = "File processing failed!"


class SynthesisError(ConversionError):
    """Raised when the output document cannot be written or verified."""


class DeliveryFailure(str, Enum):
    """Distinguishes why an email could not be sent."""

    AUTHENTICATION = "authentication"
    CONNECTION = "connection"
    SEND = "send"


class DeliveryError(ConversionError):
    """Raised when the mail transport rejects or cannot take the message."""

    message = "Error sending email!"
    status_code = 502

    def __init__(self, error: str, *, kind: DeliveryFailure = DeliveryFailure.SEND) -> None:
        super().__init__(error)
        self.kind = kind


class UnhandledConversionError(ConversionError):
    """Wraps any unexpected exception caught at the request boundary."""
