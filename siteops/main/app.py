"""
Main Application - Main Layer

This module serves as the entry point for the FastAPI application.
It initializes the container, creates the FastAPI app, and includes
the API routers, exception handlers and request metrics middleware.
"""

from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from siteops.main.config import get_settings
from siteops.main.container import app_lifespan, init_container
from siteops.presentation.controllers import errors_router, system_router
from siteops.presentation.error_handlers import register_error_handlers
from siteops.presentation.middleware import RequestMetricsMiddleware
from siteops.shared import configure_logging, get_logger, update_logging_from_settings

# Configure logging with basic settings first - before configuration is loaded
configure_logging()

# Get structured logger
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan management.

    Runs the container's app_lifespan, which owns the health check
    scheduler and pending webhook deliveries.
    """
    app.state.started_at = datetime.now(timezone.utc)
    logger.info("Application starting up")

    async with app_lifespan() as container:
        app.state.container = container
        yield

    logger.info("Application shutting down")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: The configured FastAPI application
    """
    settings = get_settings()

    # Update logging with complete settings
    update_logging_from_settings(settings)

    # Initialize dependency injection container
    container = init_container(settings)

    app = FastAPI(
        title=settings.site.title,
        description=settings.site.description,
        version=settings.site.version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.environment = settings.environment.value

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestMetricsMiddleware, recorder=container.metrics_recorder)

    register_error_handlers(app)

    app.include_router(system_router)
    app.include_router(errors_router)

    return app
