"""FastAPI application for the hexsettle game server."""

import logging

import uvicorn

import common.app
import common.settings

from .routers import catan

logger = logging.getLogger(__name__)

app = common.app.create_app(title='hexsettle')
app.include_router(catan.router)


def run(host: str = '0.0.0.0', port: int = 8000) -> None:
    """Serve the app with uvicorn."""
    logger.info('Starting hexsettle on %s:%d', host, port)
    uvicorn.run(app, host=host, port=port, log_level=common.settings.LOG_LEVEL.lower())


if __name__ == '__main__':
    run()
