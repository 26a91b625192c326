"""
Entry point for the CRUD backend
"""

import logging
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from crud_backend.app import create_app
from crud_backend.config.settings import Settings, load_settings

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.log_level)


settings = load_settings()
configure_logging(settings)

# Exported for `uvicorn main:app`
app = create_app(settings)

if __name__ == "__main__":
    import uvicorn
    logger.info(f"Starting CRUD backend on port {settings.port}")
    uvicorn.run(app, host="0.0.0.0", port=settings.port)
