# ============================================================================
# FILE: moodmusic/main.py
# ============================================================================
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from moodmusic.api.middleware import AuthGateMiddleware
from moodmusic.api.router import api_router
from moodmusic.config import Settings, get_settings
from moodmusic.core.container import ServiceContainer
from moodmusic.core.errors import register_exception_handlers
from moodmusic.core.logging import setup_logging
import logging

logger = logging.getLogger(__name__)

def create_app(settings: Optional[Settings] = None, container: Optional[ServiceContainer] = None) -> FastAPI:
    """
    Build the FastAPI application

    Clients are created in the lifespan unless a ready container is passed in.
    """
    settings = settings or get_settings()
    setup_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {settings.APP_NAME} API")
        services = container or ServiceContainer.from_settings(settings)
        # Raises (and aborts startup) when the database is unreachable
        services.startup()
        app.state.container = services
        try:
            yield
        finally:
            logger.info(f"Shutting down {settings.APP_NAME} API")
            await services.shutdown()

    app = FastAPI(
        title="MoodMusic API",
        description="Mood-based song recommendations with personal history and a community feed",
        version="1.0.0",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )

    register_exception_handlers(app)

    # Authentication gate runs inside CORS so preflight responses keep their headers
    app.add_middleware(AuthGateMiddleware, protected_prefix=settings.PROTECTED_PREFIX)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    app.include_router(api_router, prefix="/api")

    @app.get("/health")
    async def health_check():
        return {"success": True, "status": "healthy"}

    return app

app = create_app()
