# ============================================================================
# SCOPE: GLOBAL
# Description: Contenedor base con los recursos de infraestructura compartidos
#              (cliente Redis, pool de arq, engine de PostgreSQL, fábrica de sesiones).
# ============================================================================
"""
Base Container - Shared Resources.

Single Responsibility: Own the connection pools for the lifetime of the
process. Adapters built on top of them are created per invocation.

The arq pool is owned by whoever passes it in (the API lifespan or the arq
worker) and is not closed here.
"""

import logging

from arq.connections import ArqRedis
from redis.asyncio import Redis
from sqlalchemy.ext.asyncio import AsyncEngine

from app.config.settings import Settings, get_settings
from app.database.async_db import create_async_database_engine, create_session_factory
from app.integrations.databases.redis import close_redis_client, create_async_redis_client

logger = logging.getLogger(__name__)


class BaseContainer:
    """
    Base container for shared resources.

    Single Responsibility: Create and close connection pools.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        redis_client: Redis | None = None,
        engine: AsyncEngine | None = None,
        queue_pool: ArqRedis | None = None,
    ):
        """
        Initialize base container.

        Args:
            settings: Optional settings (defaults to the cached settings)
            redis_client: Optional Redis client (built from settings if omitted)
            engine: Optional async engine (built from settings if omitted)
            queue_pool: arq pool for enqueueing jobs; required by the messaging adapters
        """
        self.settings = settings or get_settings()
        self.redis = redis_client or create_async_redis_client(self.settings)
        self.engine = engine or create_async_database_engine(self.settings)
        self.session_factory = create_session_factory(self.engine)
        self._queue_pool = queue_pool

        logger.info("BaseContainer initialized")

    @property
    def queue_pool(self) -> ArqRedis:
        if self._queue_pool is None:
            raise RuntimeError("BaseContainer has no arq pool; pass queue_pool to enqueue jobs")
        return self._queue_pool

    async def aclose(self) -> None:
        """Release the Redis and database connection pools."""
        await close_redis_client(self.redis)
        await self.engine.dispose()
        logger.info("BaseContainer resources released")
