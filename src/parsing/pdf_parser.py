"""PDF text extraction using pypdf.

Reads an uploaded PDF from disk and returns its text, one page after another.
"""

import logging
from pathlib import Path

from pypdf import PdfReader
from pypdf.errors import PdfReadError

from src.exceptions import ExtractionError

logger = logging.getLogger(__name__)


def extract_pdf_text(path: Path) -> str:
    """Extract the text content of a PDF file.

    Pages are joined with a newline. Pages whose text cannot be extracted
    are skipped with a warning.

    Args:
        path: Location of the PDF file.

    Returns:
        The extracted text.

    Raises:
        ExtractionError: If the file cannot be read or holds no text.
    """
    try:
        reader = PdfReader(path)
        pages = reader.pages
        page_count = len(pages)
    except PdfReadError as e:
        raise ExtractionError(f"Corrupt or invalid PDF: {e}") from e
    except Exception as e:
        raise ExtractionError(f"Failed to read PDF: {e}") from e

    text_parts: list[str] = []
    for i, page in enumerate(pages):
        try:
            page_text = page.extract_text()
        except Exception as e:
            logger.warning(f"Failed to extract text from page {i + 1}: {e}")
            continue
        if page_text:
            text_parts.append(page_text)

    text = "\n".join(text_parts)

    if not text.strip():
        raise ExtractionError("No text found in PDF")

    logger.debug(f"Extracted {len(text)} characters from {page_count} pages")
    return text
