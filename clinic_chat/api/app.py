"""FastAPI application factory and configuration.

Main application entry point with lifespan management, middleware,
router registration and static asset serving.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from clinic_chat.api.chat import router as chat_router
from clinic_chat.audit import AuditLog
from clinic_chat.config import Settings, get_settings
from clinic_chat.models.schemas import HealthResponse
from clinic_chat.relay.chat_relay import RelayService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    settings: Settings = app.state.settings
    logger.info(f"Starting clinic chat relay (model: {settings.model})")
    if not settings.has_api_key:
        logger.warning("ANTHROPIC_API_KEY is not set; replies will be a configuration notice")
    yield
    app.state.audit.close()
    logger.info("Shutting down clinic chat relay...")


def create_app(
    settings: Settings | None = None,
    upstream_transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Optional configuration. Loads from environment if not provided.
        upstream_transport: Optional httpx transport used for provider calls.

    Returns:
        Configured FastAPI application instance.
    """
    settings = settings or get_settings()

    application = FastAPI(
        title="Clinic Chat Relay",
        description=(
            "Chat relay for the clinic website widget. Forwards a message and the "
            "prior turns to the LLM provider and streams the reply back as "
            "server-sent events."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    audit = AuditLog(settings.log_dir)
    application.state.settings = settings
    application.state.audit = audit
    application.state.relay = RelayService(settings, audit, transport=upstream_transport)

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    application.include_router(chat_router)

    @application.get("/health", response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """Report liveness and the configured model."""
        return HealthResponse(ok=True, model=settings.model)

    application.mount("/static", StaticFiles(directory=settings.static_dir), name="static")

    return application
