"""Upload receipt: validate the form fields and store the upload."""

import asyncio
import logging
import shutil
import uuid
from pathlib import Path

from fastapi import UploadFile

from src.exceptions import UploadValidationError
from src.models.schemas import ConversionRequest, UploadedFile

logger = logging.getLogger(__name__)


def _copy_to(source, destination: Path) -> None:
    destination.parent.mkdir(parents=True, exist_ok=True)
    source.seek(0)
    try:
        with destination.open("wb") as f_out:
            shutil.copyfileobj(source, f_out)
    except Exception as e:
        logger.error(f"Failed to store upload {destination}: {e}")
        destination.unlink(missing_ok=True)
        raise


async def receive_upload(
    email: str | None,
    file: UploadFile | None,
    upload_dir: Path,
) -> ConversionRequest:
    """Validate a submission and write the upload to a temporary path.

    Both fields are checked before anything touches the filesystem. The
    stored file gets a random name; nothing from the client ends up in it.

    Args:
        email: Destination address from the form.
        file: Uploaded file from the form.
        upload_dir: Directory for temporary uploads.

    Returns:
        A ConversionRequest with a fresh request id.

    Raises:
        UploadValidationError: If the email or the file is missing.
    """
    if email is None or not email.strip():
        raise UploadValidationError("Email is required")
    if file is None or not file.filename:
        raise UploadValidationError("No file uploaded")

    temp_path = upload_dir / uuid.uuid4().hex
    await asyncio.to_thread(_copy_to, file.file, temp_path)
    logger.info(f"Received upload {file.filename} -> {temp_path}")

    return ConversionRequest(
        request_id=uuid.uuid4().hex,
        email=email.strip(),
        uploaded_file=UploadedFile(
            original_name=file.filename,
            temp_path=temp_path,
            extension=Path(file.filename).suffix,
        ),
    )
