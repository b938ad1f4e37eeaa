"""
Main entrypoint for the User Store API.

This module assembles the FastAPI application, sets up logging,
registers the error handlers and includes the API router.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``, e.g.::

    uvicorn user_store_api.app.main:app --reload
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.staticfiles import StaticFiles

from .api.router import router as api_router
from .core.config import settings
from .core.errors import ApiError, api_error_handler, request_validation_handler
from .core.logging_config import setup_logging
from .core.storage import ensure_data_dir

logger = logging.getLogger(__name__)


def _resolve_static_dir() -> Path:
    static_dir = Path(settings.static_dir)
    if static_dir.is_absolute():
        return static_dir
    return Path(__file__).resolve().parent.parent.parent / static_dir


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the data directory before serving requests."""
    data_dir = ensure_data_dir()
    logger.info("Storing user documents in %s", data_dir)
    yield
    logger.info("Shutting down")


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(title=settings.project_name, version=settings.api_version, lifespan=lifespan)
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.include_router(api_router, prefix="/api")

    @app.get("/health")
    async def health_check() -> dict:
        return {"status": "ok"}

    # Mounted last so that API routes take precedence over static files.
    static_dir = _resolve_static_dir()
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(static_dir), html=True), name="static")

    return app


app = create_app()
