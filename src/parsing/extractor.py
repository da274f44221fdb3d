"""Dispatch an upload to the extractor matching its extension."""

import logging
from pathlib import Path

from src.models.schemas import ExtractedContent
from src.parsing.pdf_parser import extract_pdf_text
from src.parsing.spreadsheet_parser import extract_spreadsheet_csv

logger = logging.getLogger(__name__)

PDF_EXTENSIONS = frozenset({".pdf"})
SPREADSHEET_EXTENSIONS = frozenset({".xlsx", ".xls"})
SUPPORTED_EXTENSIONS = PDF_EXTENSIONS | SPREADSHEET_EXTENSIONS


def is_supported(extension: str) -> bool:
    """Check whether an extension has an extractor."""
    return extension.lower() in SUPPORTED_EXTENSIONS


def extract_content(path: Path, extension: str) -> ExtractedContent | None:
    """Extract text from an upload based on its original extension.

    An unsupported extension is not an error: the caller gets None and
    decides how to tell the client.

    Args:
        path: Where the upload is stored.
        extension: Extension of the original filename, with the dot.

    Returns:
        ExtractedContent, or None when the extension is not supported.

    Raises:
        ExtractionError: If a supported file yields no text or data.
    """
    extension = extension.lower()
    if not is_supported(extension):
        logger.info(f"No extractor for extension '{extension}'")
        return None

    if extension in PDF_EXTENSIONS:
        logger.info("Processing PDF file")
        return ExtractedContent(text=extract_pdf_text(path), source_type="pdf")

    logger.info("Processing spreadsheet file")
    return ExtractedContent(
        text=extract_spreadsheet_csv(path, extension),
        source_type="spreadsheet",
    )
