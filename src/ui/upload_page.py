"""NiceGUI upload page posting to the /convert endpoint."""

import logging
import os
from dataclasses import dataclass

import httpx
from nicegui import events, ui

from src.parsing.extractor import SUPPORTED_EXTENSIONS

logger = logging.getLogger(__name__)

API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:3000")
ACCEPTED_TYPES = ",".join(sorted(SUPPORTED_EXTENSIONS))

CUSTOM_CSS = """
<link href="https://fonts.googleapis.com/css2?family=Inter:wght@400;500;600&display=swap"
      rel="stylesheet">
<style>
    * { font-family: 'Inter', sans-serif; }

    body { background: #f5f5f5; min-height: 100vh; }

    .app-container {
        background: white;
        border-radius: 12px;
        box-shadow: 0 2px 8px rgba(0, 0, 0, 0.1);
        overflow: hidden;
    }

    .header { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%); }

    .drop-area .q-uploader { width: 100%; border: 2px dashed #c7d2fe; box-shadow: none; }
    .drop-area .q-uploader--dnd { border-color: #667eea; background: #eef2ff; }

    .send-btn { background: linear-gradient(135deg, #667eea 0%, #764ba2 100%) !important; }
</style>
"""


def set_api_base_url(url: str) -> None:
    """Point the page at the API, unless API_BASE_URL was set explicitly."""
    global API_BASE_URL
    if not os.getenv("API_BASE_URL"):
        API_BASE_URL = url


@dataclass
class SelectedFile:
    name: str
    content: bytes
    content_type: str


async def submit_conversion(email: str, selected: SelectedFile) -> str:
    """Post the file and email to /convert and return the message to show."""
    async with httpx.AsyncClient(timeout=120.0) as client:
        try:
            response = await client.post(
                f"{API_BASE_URL}/convert",
                data={"email": email},
                files={"file": (selected.name, selected.content, selected.content_type)},
            )
            data = response.json()
        except httpx.RequestError as e:
            logger.error(f"Upload page could not reach the API: {e}")
            return "An error occurred during conversion"
        except ValueError:
            return f"An error occurred during conversion (HTTP {response.status_code})"

    if data.get("error"):
        logger.warning(f"Conversion error shown to user: {data['error']}")
    return data.get("message", "An error occurred during conversion")


@ui.page("/")
def upload_page() -> None:
    """Main upload page."""
    ui.add_head_html(CUSTOM_CSS)
    state: dict[str, SelectedFile | None] = {"file": None}

    async def on_upload(e: events.UploadEventArguments) -> None:
        state["file"] = SelectedFile(
            name=e.file.name,
            content=await e.file.read(),
            content_type=e.file.content_type or "application/octet-stream",
        )
        message.set_text("1 file(s) selected.")

    async def on_submit() -> None:
        selected = state["file"]
        if selected is None:
            message.set_text("Please select a file first!")
            return
        if not email_input.value or not email_input.value.strip():
            message.set_text("Please enter an email address!")
            return

        submit_btn.disable()
        message.set_text("Converting and sending file...")
        try:
            message.set_text(await submit_conversion(email_input.value.strip(), selected))
        finally:
            submit_btn.enable()

    # === UI Layout ===
    with (
        ui.element("div").classes("w-full min-h-screen p-4 md:p-8"),
        ui.column().classes("w-full max-w-xl mx-auto app-container"),
    ):
        with ui.row().classes("w-full header px-5 py-4 items-center gap-3"):
            ui.icon("description").classes("text-white text-3xl")
            ui.label("Convert to Word").classes("text-lg font-semibold text-white")

        with ui.column().classes("w-full p-5 gap-4"):
            ui.label("Drop a PDF or Excel file here, or click to choose one.").classes(
                "text-sm text-gray-500"
            )
            with ui.element("div").classes("w-full drop-area"):
                ui.upload(
                    on_upload=on_upload,
                    auto_upload=True,
                    max_files=1,
                ).props(f'accept="{ACCEPTED_TYPES}" flat').classes("w-full")

            email_input = ui.input(
                label="Email address",
                placeholder="you@example.com",
            ).props("type=email outlined dense").classes("w-full")

            submit_btn = (
                ui.button("Convert & Send", icon="send", on_click=on_submit)
                .props("unelevated")
                .classes("send-btn text-white")
            )
            message = ui.label("").classes("text-sm text-gray-700")

