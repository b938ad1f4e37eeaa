"""Entry point for the User Store API.

Creates the data directory and serves the application with Uvicorn.
Host, port and storage location are read from the environment
(``HOST``, ``PORT``, ``DATA_DIR``); see ``core.config``.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from user_store_api.app.core.config import settings
from user_store_api.app.core.storage import ensure_data_dir
from user_store_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    ensure_data_dir()
    config = Config(app=app, host=settings.host, port=settings.port, reload=False, log_level=settings.log_level.lower())
    server = Server(config)
    logging.getLogger(__name__).info("Server listening on %s", settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
