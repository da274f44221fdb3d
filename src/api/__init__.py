"""FastAPI endpoints for the conversion service.

Endpoints:
    - GET /health: Service health status
    - POST /convert: Upload a PDF or spreadsheet and an email address;
      the text is converted to a Word document and emailed back
"""

from src.api.app import create_app

__all__ = ["create_app"]
