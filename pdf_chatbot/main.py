"""Main application entry point.

Runs FastAPI (port 8000) with NiceGUI mounted for the chat interface.
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv
from pydantic import ValidationError

# Load environment variables before any other imports that might need them
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def check_completion_config() -> bool:
    """Report missing or invalid completion settings before serving pages."""
    from pdf_chatbot.completion.config import get_completion_config

    try:
        config = get_completion_config()
    except ValidationError as e:
        logger.error(f"Invalid completion configuration: {e}")
        return False

    logger.info(f"Using completion model {config.model_name}")
    return True


def run_integrated() -> None:
    """Run FastAPI with NiceGUI mounted on the same server.

    FastAPI handles the parse-pdf API, NiceGUI handles the UI.
    Both accessible on port 8000.
    """
    import uvicorn
    from nicegui import ui

    from pdf_chatbot.api.app import create_app
    from pdf_chatbot.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    app = create_app()

    # Mount NiceGUI onto FastAPI
    ui.run_with(
        app,
        title="PDF Chatbot",
        favicon="📄",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "pdf-chatbot-secret"),
    )

    logger.info("Starting integrated server on http://localhost:8000")
    logger.info("API docs available at http://localhost:8000/docs")
    logger.info("Chat UI available at http://localhost:8000/")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def run_separate() -> None:
    """Run FastAPI and NiceGUI as separate servers.

    FastAPI on port 8000, NiceGUI on port 8080. The UI extracts PDFs
    through the API's /api/parse-pdf endpoint in this mode.
    """
    import subprocess
    import time

    logger.info("Starting FastAPI on http://localhost:8000")
    logger.info("Starting NiceGUI on http://localhost:8080")

    fastapi_proc = subprocess.Popen(
        [
            sys.executable,
            "-m",
            "uvicorn",
            "pdf_chatbot.api.app:app",
            "--host",
            os.getenv("HOST", "0.0.0.0"),
            "--port",
            "8000",
        ]
    )

    ui_env = {**os.environ, "PDF_EXTRACTOR": "remote"}
    ui_env.setdefault("API_BASE_URL", "http://localhost:8000")
    nicegui_proc = subprocess.Popen(
        [sys.executable, "-m", "pdf_chatbot.ui.chat_page"],
        env=ui_env,
    )

    try:
        while fastapi_proc.poll() is None and nicegui_proc.poll() is None:
            time.sleep(1)
    except KeyboardInterrupt:
        logger.info("Shutting down servers...")
    finally:
        fastapi_proc.terminate()
        nicegui_proc.terminate()
        fastapi_proc.wait()
        nicegui_proc.wait()


def main() -> None:
    """Application entry point.

    Set RUN_MODE=separate to run FastAPI and NiceGUI on different ports.
    Default is integrated mode (both on port 8000).
    """
    if not check_completion_config():
        sys.exit(1)

    mode = os.getenv("RUN_MODE", "integrated").lower()

    logger.info(f"Starting PDF Chatbot in {mode} mode")

    if mode == "separate":
        run_separate()
    else:
        run_integrated()


if __name__ == "__main__":
    main()
