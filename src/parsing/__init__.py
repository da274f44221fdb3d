"""Content extraction from uploaded documents.

Turns an upload into newline-delimited plain text.

Responsibilities:
    - PDF text extraction with pypdf
    - First-sheet CSV flattening of .xlsx (openpyxl) and .xls (xlrd) workbooks
    - Extension-based dispatch, with unsupported types reported as None
"""

from src.parsing.extractor import SUPPORTED_EXTENSIONS, extract_content, is_supported
from src.parsing.pdf_parser import extract_pdf_text
from src.parsing.spreadsheet_parser import extract_spreadsheet_csv, rows_to_csv

__all__ = [
    "SUPPORTED_EXTENSIONS",
    "extract_content",
    "extract_pdf_text",
    "extract_spreadsheet_csv",
    "is_supported",
    "rows_to_csv",
]
