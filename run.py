"""Entry point for the Razor Tracker API.

Starts the FastAPI application under uvicorn.  Host and port come from
the ``SERVER_HOST`` and ``SERVER_PORT`` environment variables (defaults
``0.0.0.0`` and ``8080``); see ``razor_tracker_api/app/core/config.py``
for the remaining settings.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from razor_tracker_api.app.core.config import settings
from razor_tracker_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.server_host,
        port=settings.server_port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    logging.getLogger(__name__).info(
        "Server starting on %s:%s", settings.server_host, settings.server_port
    )
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
