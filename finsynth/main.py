"""FastAPI application instance."""
from __future__ import annotations

from fastapi import FastAPI

from finsynth.core import get_logger, get_settings
from finsynth.core.log import init_logging
from finsynth.routers import generation_router

LOGGER = get_logger(__name__)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = get_settings()
    init_logging(level=settings.logging.level, log_dir=settings.logging.log_dir)

    app = FastAPI(title="Synthetic Financial Data Generator", version="0.1.0")
    app.include_router(generation_router)
    LOGGER.info("Generator API ready (currency=%s)", settings.generator.currency)
    return app


app = create_app()
