"""Request pipeline: upload receipt and the conversion service.

Framework-agnostic apart from receiving a FastAPI UploadFile, so the HTTP
layer and the upload page share the same core logic.
"""

from src.conversion.receiver import receive_upload
from src.conversion.service import SUCCESS_MESSAGE, UNSUPPORTED_MESSAGE, ConversionService

__all__ = ["SUCCESS_MESSAGE", "UNSUPPORTED_MESSAGE", "ConversionService", "receive_upload"]
