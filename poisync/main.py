"""
FastAPI application setup with dependency injection.
"""

import logging
import time
import uuid
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request

from poisync.api import health_router, poi_router
from poisync.config.settings import Settings, get_settings
from poisync.core.dependencies import ServiceContainer
from poisync.core.error_handlers import setup_error_handlers
from poisync.core.logging import configure_logging

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None,
               service_container: Optional[ServiceContainer] = None) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        settings: Settings to use instead of the global instance
        service_container: Prebuilt container, mainly for tests

    Returns:
        FastAPI: Configured application instance
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level.value, settings.log_json, settings.log_format)
    container = service_container or ServiceContainer(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {settings.app_name} v{settings.app_version}")
        await container.initialize_services()
        app.state.service_container = container
        try:
            yield
        finally:
            logger.info("Shutting down application")
            await container.cleanup_services()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    setup_error_handlers(app)

    @app.middleware("http")
    async def logging_middleware(request: Request, call_next):
        """Log requests and responses with timing information."""
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id
        start_time = time.time()

        response = await call_next(request)

        processing_time = (time.time() - start_time) * 1000
        logger.info(
            f"{request.method} {request.url.path} {response.status_code} ({processing_time:.2f}ms)",
            extra={'request_id': request_id, 'processing_time_ms': processing_time},
        )
        response.headers["X-Request-ID"] = request_id
        return response

    app.include_router(health_router)
    app.include_router(poi_router)
    return app


app = create_app()
