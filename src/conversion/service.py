"""The conversion pipeline: extract, synthesize, deliver, clean up.

One ConversionService is shared by all requests; each call to convert()
runs its own sequential pipeline and touches only the files that request
created, so requests need no coordination beyond unique paths.
"""

import asyncio
import logging
import re
from pathlib import Path

from src.cleanup.scheduler import CleanupScheduler
from src.config import AppConfig
from src.delivery.mailer import MailSender
from src.document.docx_builder import write_document
from src.exceptions import ConversionError, DeliveryError, ExtractionError, SynthesisError
from src.models.schemas import (
    ConversionOutcome,
    ConversionRequest,
    ConversionState,
    OutgoingEmail,
)
from src.parsing.extractor import extract_content

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "File converted and sent to email!"
UNSUPPORTED_MESSAGE = "Unsupported file type!"
OUTPUT_EXTENSION = ".docx"

_UNSAFE_NAME_CHARS = re.compile(r"[^\w.-]+")


def safe_base_name(name: str) -> str:
    """Reduce a client-supplied base name to filesystem-safe characters."""
    return _UNSAFE_NAME_CHARS.sub("_", name).strip("._") or "document"


class ConversionService:
    """Runs the per-request conversion pipeline."""

    def __init__(
        self,
        config: AppConfig,
        mailer: MailSender,
        cleanup: CleanupScheduler,
    ) -> None:
        self._config = config
        self._mailer = mailer
        self._cleanup = cleanup

    @property
    def config(self) -> AppConfig:
        return self._config

    def output_path_for(self, request: ConversionRequest) -> Path:
        """Output location for a request, unique per request id."""
        stem = safe_base_name(request.uploaded_file.base_name)
        return self._config.output_dir / f"{request.request_id}-{stem}{OUTPUT_EXTENSION}"

    def attachment_name_for(self, request: ConversionRequest) -> str:
        return safe_base_name(request.uploaded_file.base_name) + OUTPUT_EXTENSION

    @staticmethod
    def _transition(request: ConversionRequest, state: ConversionState) -> None:
        logger.debug(f"[{request.request_id}] {request.state.value} -> {state.value}")
        request.state = state

    async def convert(self, request: ConversionRequest) -> ConversionOutcome:
        """Run the pipeline for one request.

        The temporary upload is deleted exactly once whatever happens. A
        document that was written but not delivered is deleted as well;
        a delivered one is deleted after the retention delay.

        Args:
            request: The received request.

        Returns:
            ConversionOutcome in state DELIVERED or UNSUPPORTED.

        Raises:
            ExtractionError: No text or data could be extracted.
            SynthesisError: The output document could not be written.
            DeliveryError: The email could not be sent.
            Exception: Anything unexpected, with the request in state FAILED.
        """
        upload = request.uploaded_file
        output_path = self.output_path_for(request)
        logger.info(f"[{request.request_id}] Processing file: {upload.original_name}")

        try:
            return await self._run(request, output_path)
        except ConversionError as e:
            logger.error(f"[{request.request_id}] {request.state.value}: {e.error}")
            raise
        except Exception:
            self._transition(request, ConversionState.FAILED)
            logger.exception(f"[{request.request_id}] Error during file conversion")
            raise
        finally:
            self._cleanup.remove_now(upload.temp_path, label="temporary upload")
            if request.state is not ConversionState.DELIVERED and output_path.exists():
                self._cleanup.remove_now(output_path, label="undelivered output")

    async def _run(self, request: ConversionRequest, output_path: Path) -> ConversionOutcome:
        upload = request.uploaded_file

        self._transition(request, ConversionState.EXTRACTING)
        try:
            content = await asyncio.to_thread(extract_content, upload.temp_path, upload.extension)
        except ExtractionError:
            self._transition(request, ConversionState.EXTRACT_FAILED)
            raise
        except Exception as e:
            self._transition(request, ConversionState.EXTRACT_FAILED)
            raise ExtractionError(str(e)) from e

        if content is None:
            self._transition(request, ConversionState.UNSUPPORTED)
            return ConversionOutcome(state=request.state, message=UNSUPPORTED_MESSAGE)

        self._transition(request, ConversionState.EXTRACTED)
        logger.info(
            f"[{request.request_id}] Extracted {len(content.lines)} line(s) of {content.source_type} content"
        )

        self._transition(request, ConversionState.SYNTHESIZING)
        try:
            await asyncio.to_thread(write_document, content.text, output_path)
        except SynthesisError:
            self._transition(request, ConversionState.SYNTHESIS_FAILED)
            raise
        self._transition(request, ConversionState.SYNTHESIZED)
        logger.info(f"[{request.request_id}] File successfully converted: {output_path}")

        mail_config = self._mailer.config
        email = OutgoingEmail(
            sender=mail_config.sender,
            recipient=request.email,
            subject=mail_config.subject,
            body=mail_config.body,
            attachment_path=output_path,
            attachment_name=self.attachment_name_for(request),
        )

        self._transition(request, ConversionState.DELIVERING)
        try:
            message_id = await self._mailer.send(email)
        except DeliveryError as e:
            self._transition(request, ConversionState.DELIVERY_FAILED)
            logger.error(f"[{request.request_id}] Delivery failed ({e.kind.value}): {e.error}")
            raise
        self._transition(request, ConversionState.DELIVERED)

        self._cleanup.schedule_removal(output_path)

        return ConversionOutcome(
            state=request.state,
            message=SUCCESS_MESSAGE,
            output_path=output_path,
            message_id=message_id,
        )
