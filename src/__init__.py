"""Convert and Mail - turn uploaded PDFs and spreadsheets into emailed Word documents.

Combines FastAPI for the upload endpoint, pypdf/openpyxl/xlrd for
extraction, python-docx for document synthesis, SMTP for delivery and
NiceGUI for the upload page.

Components:
    - api: HTTP endpoints and error responses
    - conversion: Upload receipt and the per-request pipeline
    - parsing: PDF and spreadsheet text extraction
    - document: Word document synthesis
    - delivery: Email transport
    - cleanup: Upload and output file removal
    - ui: Upload page
    - models: Pipeline and response schemas
"""

__version__ = "0.1.0"
