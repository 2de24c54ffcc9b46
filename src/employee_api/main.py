"""
Entry point for the Employee API
"""

import logging
import sys

import uvicorn

from employee_api.app import create_app
from employee_api.config.settings import load_settings
from employee_api.utils.errors import StartupError

logger = logging.getLogger(__name__)


def run() -> None:
    logging.basicConfig(level=logging.INFO)

    try:
        settings = load_settings()
    except StartupError as e:
        logger.critical(f"Startup aborted: {e.message}")
        sys.exit(1)

    logging.getLogger().setLevel(settings.log_level)
    app = create_app(settings)

    logger.info(f"Starting Employee API on {settings.host}:{settings.port}")
    # A failed pool build in the lifespan makes uvicorn exit before serving
    uvicorn.run(app, host=settings.host, port=settings.port, lifespan="on")


if __name__ == "__main__":
    run()
