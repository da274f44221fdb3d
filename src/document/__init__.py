"""Output document synthesis.

Builds .docx files from extracted text, one paragraph per line.
"""

from src.document.docx_builder import build_document, render_docx, split_lines, write_document

__all__ = ["build_document", "render_docx", "split_lines", "write_document"]
