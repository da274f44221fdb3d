"""FastAPI application factory and configuration.

Application assembly with lifespan management, middleware, error handling
and router registration.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src import __version__
from src.api.routes import router as convert_router
from src.cleanup.scheduler import CleanupScheduler
from src.config import AppConfig, get_app_config
from src.conversion.service import ConversionService
from src.delivery.config import get_mail_config
from src.delivery.mailer import EmailDeliveryService, MailSender
from src.exceptions import ConversionError
from src.models.schemas import ConvertResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Startup sweeps output files left over from a previous run and checks
    the mail transport. Shutdown cancels scheduled deletions.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    config: AppConfig = app.state.config
    cleanup: CleanupScheduler = app.state.cleanup

    # Startup
    logger.info("Starting conversion service...")
    cleanup.sweep_stale(config.output_dir)
    if config.verify_transport:
        verify = getattr(app.state.mailer, "verify", None)
        if verify is not None:
            await verify()
    yield
    # Shutdown
    logger.info("Shutting down conversion service...")
    await cleanup.shutdown()


async def conversion_error_handler(request: Request, exc: ConversionError) -> JSONResponse:
    """Render any pipeline failure as the standard JSON body."""
    body = ConvertResponse(message=exc.message, error=exc.error, details=exc.details)
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(exclude_none=True),
    )


def create_app(
    config: AppConfig | None = None,
    mailer: MailSender | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Service configuration. Loads from environment if not provided.
        mailer: Delivery service. An SMTP service configured from the
                environment is created if not provided.

    Returns:
        Configured FastAPI application instance.
    """
    config = config or get_app_config()
    mailer = mailer or EmailDeliveryService(get_mail_config())
    cleanup = CleanupScheduler(config.retention_seconds)

    application = FastAPI(
        title="Convert and Mail API",
        description=(
            "Converts uploaded PDF and spreadsheet files into Word documents "
            "and emails the result to the address supplied with the upload."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.state.config = config
    application.state.mailer = mailer
    application.state.cleanup = cleanup
    application.state.conversion_service = ConversionService(config, mailer, cleanup)

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    application.add_exception_handler(ConversionError, conversion_error_handler)
    application.include_router(convert_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "convert-and-mail"}

    return application
