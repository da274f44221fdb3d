"""Word document synthesis using python-docx.

Each line of extracted text becomes one paragraph holding a single run.
"""

import io
import logging
import re
from pathlib import Path

from docx import Document
from docx.document import Document as DocumentObject

from src.exceptions import SynthesisError

logger = logging.getLogger(__name__)

# XML 1.0 forbids these; python-docx raises on them
_XML_INVALID_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\ufffe\uffff]")


def split_lines(text: str) -> list[str]:
    """Split text on newlines, dropping a carriage return left before each break."""
    return [line.removesuffix("\r") for line in text.split("\n")]


def build_document(text: str) -> DocumentObject:
    """Build a document with one single-run paragraph per line of text.

    Args:
        text: Newline-delimited text.

    Returns:
        The in-memory python-docx Document.
    """
    document = Document()
    for line in split_lines(text):
        paragraph = document.add_paragraph()
        paragraph.add_run(_XML_INVALID_CHARS.sub("", line))
    return document


def render_docx(text: str) -> bytes:
    """Render text to .docx bytes."""
    buffer = io.BytesIO()
    build_document(text).save(buffer)
    return buffer.getvalue()


def write_document(text: str, output_path: Path) -> Path:
    """Render text to a .docx file, creating the output directory if needed.

    Args:
        text: Newline-delimited text.
        output_path: Destination file.

    Returns:
        The path written.

    Raises:
        SynthesisError: If rendering or writing fails, or the file is
            missing afterwards.
    """
    try:
        content = render_docx(text)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_bytes(content)
    except (OSError, ValueError) as e:
        raise SynthesisError(f"Failed to write output document: {e}") from e

    if not output_path.exists():
        raise SynthesisError("Failed to create output file")

    logger.info(f"Wrote {output_path} ({len(content)} bytes)")
    return output_path
