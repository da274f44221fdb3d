"""Pydantic models for the conversion pipeline and its HTTP surface.

Models:
    - ConversionState: Per-request pipeline state
    - UploadedFile: Stored upload with its original name and extension
    - ConversionRequest: One conversion job
    - ExtractedContent: Text pulled out of an upload
    - ConversionOutcome: Non-failing pipeline result
    - OutgoingEmail: Email carrying the generated document
    - ConvertResponse: JSON body of POST /convert
"""

from src.models.schemas import (
    ConversionOutcome,
    ConversionRequest,
    ConversionState,
    ConvertResponse,
    ExtractedContent,
    OutgoingEmail,
    UploadedFile,
)

__all__ = [
    "ConversionOutcome",
    "ConversionRequest",
    "ConversionState",
    "ConvertResponse",
    "ExtractedContent",
    "OutgoingEmail",
    "UploadedFile",
]
