"""Entry point for the marketplace API.

Launches the FastAPI application under Uvicorn.  Host and port are
read from the ``HOST`` and ``PORT`` environment variables (defaults
``0.0.0.0`` and ``8000``); set ``SEED_DEMO_DATA=1`` to start with the
demo marketplace loaded.

Usage:
    python run.py
"""
import asyncio
import logging

from uvicorn import Config, Server

from agri_market_api.app.core.config import settings
from agri_market_api.app.main import app


async def main() -> None:
    """Serve the API until interrupted."""
    config = Config(
        app=app,
        host=settings.host,
        port=settings.port,
        reload=False,
        log_level=settings.log_level.lower(),
    )
    server = Server(config)
    logging.getLogger(__name__).info("Starting %s on %s:%s", settings.project_name, settings.host, settings.port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
