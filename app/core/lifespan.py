"""Application lifespan: startup and shutdown.

Single place for startup/shutdown wiring; no business logic here.
"""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from app.core.config import get_settings
from app.infrastructure.persistence.database import dispose_engine
from app.shared.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Configure logging on startup; dispose the SQL engine on shutdown."""
    settings = get_settings()
    setup_logging()
    logger.info(
        "%s %s starting (environment=%s)",
        settings.app_name,
        settings.app_version,
        settings.environment,
    )

    yield

    await dispose_engine()
    logger.info("Shutdown complete")
