"""Startup and shutdown hooks for applications serving paginated listings."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from pagekit.core.config import get_settings
from pagekit.core.database import close_engine
from pagekit.core.log import configure_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    """Configure logging on startup and release the engine on shutdown.

    Pass as ``FastAPI(lifespan=lifespan)``.
    """
    settings = get_settings()
    configure_logging(settings)
    logger.info(
        "Pagination defaults: limit=%s sort=%s page_window=%s",
        settings.default_limit,
        settings.default_sort.value,
        settings.default_page_window,
    )

    yield

    logger.info("Releasing database engine")
    close_engine()
