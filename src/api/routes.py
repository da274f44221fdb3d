"""Conversion endpoint.

Receives the upload, runs the pipeline and turns the outcome into JSON.
"""

import logging
import traceback
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from src.conversion.receiver import receive_upload
from src.conversion.service import ConversionService
from src.exceptions import ConversionError, UnhandledConversionError
from src.models.schemas import ConvertResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["convert"])


def get_conversion_service(request: Request) -> ConversionService:
    """Return the service created by the application factory."""
    return request.app.state.conversion_service


@router.post(
    "/convert",
    response_model=ConvertResponse,
    response_model_exclude_none=True,
)
async def convert_file(
    service: Annotated[ConversionService, Depends(get_conversion_service)],
    email: Annotated[str | None, Form()] = None,
    file: Annotated[UploadFile | None, File()] = None,
) -> ConvertResponse:
    """Convert an uploaded document and email it as a Word file.

    Accepts a PDF (.pdf) or spreadsheet (.xlsx, .xls) together with an
    email address. Text is extracted, written one line per paragraph into a
    .docx file and sent to the address as an attachment.

    Args:
        service: The conversion pipeline.
        email: Destination address (multipart text field).
        file: The document (multipart file field).

    Returns:
        ConvertResponse with the outcome message. Unsupported file types
        are reported here too, with status 200.

    Raises:
        400: Email or file missing.
        500: Extraction, synthesis or unexpected failure.
        502: The email could not be sent.
    """
    logger.info("Received file upload request")
    try:
        request = await receive_upload(email, file, service.config.upload_dir)
        outcome = await service.convert(request)
    except ConversionError:
        raise
    except Exception as e:
        details = traceback.format_exc() if service.config.debug else None
        raise UnhandledConversionError(str(e), details=details) from e

    return ConvertResponse(message=outcome.message)
