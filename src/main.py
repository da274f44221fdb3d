"""Main application entry point.

Runs FastAPI with the NiceGUI upload page mounted at "/".
Environment variables are loaded from .env file.
"""

import logging
import os
import socket
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def port_is_free(host: str, port: int) -> bool:
    """Check whether a TCP port can be bound on host.

    SO_REUSEADDR matches what uvicorn sets, so a port whose old connections
    sit in TIME_WAIT still counts as free.
    """
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        try:
            sock.bind((host, port))
        except OSError:
            return False
    return True


def resolve_port(host: str, port: int) -> int:
    """Return port, or port + 1 if port is already in use.

    Only one fallback is attempted; if port + 1 is busy as well the server
    fails to bind and reports it.
    """
    if port_is_free(host, port):
        return port
    logger.warning(f"Port {port} is already in use, trying port {port + 1}...")
    return port + 1


def api_base_url(host: str, port: int) -> str:
    """URL the upload page uses to reach the API.

    Wildcard bind addresses are not reachable as such, so they map to
    loopback; a specific address is used as configured.
    """
    if host in ("", "0.0.0.0", "::"):
        host = "127.0.0.1"
    elif ":" in host:
        host = f"[{host}]"
    return f"http://{host}:{port}"


def main() -> None:
    """Application entry point.

    Starts FastAPI with the upload page on PORT (default 3000).
    """
    import uvicorn
    from nicegui import ui

    from src.api.app import create_app
    from src.config import get_app_config
    from src.ui import upload_page

    config = get_app_config()
    port = resolve_port(config.host, config.port)
    upload_page.set_api_base_url(api_base_url(config.host, port))

    app = create_app(config)

    # Mount NiceGUI onto FastAPI
    ui.run_with(app, title="Convert to Word")

    logger.info(f"Server running on http://localhost:{port}")
    logger.info(f"API docs available at http://localhost:{port}/docs")

    uvicorn.run(
        app,
        host=config.host,
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    main()
