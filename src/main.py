"""Main application entry point.

Runs the FastAPI relay (PORT, default 8000) with NiceGUI mounted for the chat
interface. Environment variables are loaded from .env file.
"""

import logging
import os
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


def run_integrated() -> None:
    """Run FastAPI with NiceGUI mounted on the same server.

    FastAPI serves /api/chat, NiceGUI serves the chat page.
    Both accessible on port 8000.
    """
    import uvicorn
    from nicegui import ui

    from src.api.app import create_app
    from src.relay.config import get_relay_config
    from src.ui.chat_page import APP_TITLE, chat_page  # noqa: F401 - Registers the page

    config = get_relay_config()
    app = create_app(config)

    # Mount NiceGUI onto FastAPI
    ui.run_with(
        app,
        title=APP_TITLE,
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "prolog-assistant-secret"),
    )

    port = int(os.getenv("PORT", "8000"))
    logger.info(f"Starting integrated server on http://localhost:{port}")
    logger.info(f"Relay backend: {config.backend_url or '<not configured>'}")
    logger.info(f"Chat UI available at http://localhost:{port}/")

    uvicorn.run(
        app,
        host=os.getenv("HOST", "0.0.0.0"),
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def reload_enabled() -> bool:
    """Whether RELOAD asks for uvicorn's auto-reload (development only)."""
    return os.getenv("RELOAD", "").strip().lower() in {"1", "true", "yes"}


def build_api_command() -> list[str]:
    """Build the uvicorn command line for the relay in separate mode.

    Honors the same HOST, PORT, and LOG_LEVEL settings as integrated mode.
    """
    command = [
        sys.executable,
        "-m",
        "uvicorn",
        "src.api.app:app",
        "--host",
        os.getenv("HOST", "0.0.0.0"),
        "--port",
        os.getenv("PORT", "8000"),
        "--log-level",
        os.getenv("LOG_LEVEL", "info").lower(),
    ]
    if reload_enabled():
        command.append("--reload")
    return command


def build_ui_env() -> dict[str, str]:
    """Environment for the NiceGUI process, pointing it at the relay's port."""
    env = dict(os.environ)
    env.setdefault("API_BASE_URL", f"http://localhost:{os.getenv('PORT', '8000')}")
    return env


def run_separate() -> None:
    """Run FastAPI and NiceGUI as separate servers.

    FastAPI on PORT (default 8000), NiceGUI on UI_PORT (default 8080).
    The UI reaches the relay through API_BASE_URL.
    """
    import asyncio
    import subprocess

    async def run_servers() -> None:
        logger.info(f"Starting FastAPI relay on http://localhost:{os.getenv('PORT', '8000')}")
        logger.info(f"Starting NiceGUI on http://localhost:{os.getenv('UI_PORT', '8080')}")

        fastapi_proc = subprocess.Popen(build_api_command())

        nicegui_proc = subprocess.Popen(
            [sys.executable, "-c", "from src.ui.chat_page import main; main()"],
            env=build_ui_env(),
        )

        try:
            while True:
                await asyncio.sleep(1)
                if fastapi_proc.poll() is not None or nicegui_proc.poll() is not None:
                    break
        except KeyboardInterrupt:
            logger.info("Shutting down servers...")
        finally:
            fastapi_proc.terminate()
            nicegui_proc.terminate()
            fastapi_proc.wait()
            nicegui_proc.wait()

    asyncio.run(run_servers())


def main() -> None:
    """Application entry point.

    Set RUN_MODE=separate to run FastAPI and NiceGUI on different ports.
    Default is integrated mode (both on port 8000).
    """
    mode = os.getenv("RUN_MODE", "integrated").lower()

    logger.info(f"Starting Prolog Debugging Assistant in {mode} mode")

    if mode == "separate":
        run_separate()
    else:
        run_integrated()


if __name__ == "__main__":
    main()
