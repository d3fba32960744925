"""
Application lifecycle management using the FastAPI lifespan pattern.

Creates the shared connection pools (including the arq pool the API enqueues
jobs with) and the appointment container on startup, stores them on
``app.state`` and releases them on shutdown.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from arq.connections import ArqRedis
from fastapi import FastAPI

from app.config.settings import Settings, get_settings
from app.core.container import AppointmentContainer, BaseContainer
from app.database.async_db import check_db_connection
from app.integrations.databases.redis import check_redis_connection, close_redis_client, create_queue_pool

logger = logging.getLogger(__name__)


class LifecycleManager:
    """
    Manages application lifecycle events.

    Handles startup initialization and graceful shutdown.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()
        self._base: BaseContainer | None = None
        self._queue_pool: ArqRedis | None = None

    async def startup(self, app: FastAPI) -> None:
        """
        Execute startup tasks.

        Called when the application starts. Fails if the arq pool cannot
        connect, since no appointment could be published without it.
        """
        if self._base is not None:
            logger.warning("Lifecycle already initialized, skipping startup")
            return

        logger.info("Starting application lifecycle...")

        self._queue_pool = await create_queue_pool(self._settings)
        self._base = BaseContainer(settings=self._settings, queue_pool=self._queue_pool)
        app.state.base_container = self._base
        app.state.appointment_container = AppointmentContainer(self._base)

        await self._verify_external_services()

        logger.info("Application lifecycle startup completed")

    async def shutdown(self, app: FastAPI) -> None:
        """
        Execute shutdown tasks.

        Called when the application stops.
        """
        if self._base is None:
            logger.warning("Lifecycle not initialized, skipping shutdown")
            return

        logger.info("Stopping application lifecycle...")
        await self._base.aclose()
        if self._queue_pool is not None:
            await close_redis_client(self._queue_pool)
        self._base = None
        self._queue_pool = None
        logger.info("Application lifecycle shutdown completed")

    async def _verify_external_services(self) -> None:
        """Log connectivity with PostgreSQL and Redis. Startup continues either way."""
        assert self._base is not None

        if await check_db_connection(self._base.engine):
            logger.info("PostgreSQL connectivity verified")
        else:
            logger.warning("PostgreSQL is not reachable; country lookups will fail until it is")

        if await check_redis_connection(self._base.redis):
            logger.info("Redis connectivity verified")
        else:
            logger.warning("Redis is not reachable; appointment requests will fail until it is")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    FastAPI lifespan context manager.

    Usage:
        app = FastAPI(lifespan=lifespan)
    """
    lifecycle = LifecycleManager(getattr(app.state, "settings", None))

    # Startup
    await lifecycle.startup(app)

    yield  # Application runs here

    # Shutdown
    await lifecycle.shutdown(app)
