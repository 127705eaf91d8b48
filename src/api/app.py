"""FastAPI application factory and configuration.

Main application entry point with lifespan management, middleware,
and router registration.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.api.chat import router as chat_router
from src.relay.config import RelayConfig, get_relay_config
from src.relay.upstream import UpstreamRelay

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    # Startup
    logger.info("Starting Prolog Debugging Assistant relay...")
    if not app.state.relay.config.backend_url:
        logger.warning("BACKEND_URL is not set; chat requests will fail with 500")
    yield
    # Shutdown
    logger.info("Shutting down Prolog Debugging Assistant relay...")


def create_app(
    config: RelayConfig | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Relay configuration. Loads from environment if not provided.
        transport: Optional httpx transport for upstream calls (used by tests).

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="Prolog Debugging Assistant API",
        description=(
            "Relays error descriptions typed into the chat UI to the Prolog "
            "debugging assistant backend and normalizes its answers and failures "
            "into JSON."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    application.state.relay = UpstreamRelay(config or get_relay_config(), transport=transport)

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    application.include_router(chat_router)

    @application.get("/health")
    async def health_check() -> dict[str, str]:
        """Check service health status."""
        return {"status": "healthy", "service": "prolog-debug-assistant"}

    return application


app = create_app()
