"""Service configuration with environment variable loading.

Pydantic-based configuration for directories, retention and the HTTP
listener. Mail transport settings live in src.delivery.config.
"""

import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load environment variables from .env file
load_dotenv()


def _env_flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class AppConfig(BaseModel):
    """Configuration for the conversion service.

    Attributes:
        upload_dir: Where received uploads are stored until processed.
        output_dir: Where generated documents wait for delivery and retention.
        retention_seconds: Delay before a delivered document is deleted.
        host: Interface the HTTP server binds to.
        port: Preferred port; port + 1 is tried once if it is taken.
        verify_transport: Probe the mail transport once at startup.
        debug: Include tracebacks in unhandled-error responses.
    """

    upload_dir: Path = Field(
        default_factory=lambda: Path(os.getenv("UPLOAD_DIR", "uploads")),
        description="Temporary storage for received uploads",
    )
    output_dir: Path = Field(
        default_factory=lambda: Path(os.getenv("OUTPUT_DIR", "converted")),
        description="Storage for generated documents",
    )
    retention_seconds: float = Field(
        default_factory=lambda: float(os.getenv("RETENTION_SECONDS", "300")),
        ge=0.0,
        description="Seconds a delivered document is kept before deletion",
    )
    host: str = Field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = Field(
        default_factory=lambda: int(os.getenv("PORT", "3000")),
        ge=1,
        le=65535,
    )
    verify_transport: bool = Field(default_factory=lambda: _env_flag("VERIFY_TRANSPORT", "true"))
    debug: bool = Field(default_factory=lambda: _env_flag("DEBUG", "false"))


def get_app_config() -> AppConfig:
    """Create service configuration from environment.

    Returns:
        Configured AppConfig instance.
    """
    return AppConfig()
