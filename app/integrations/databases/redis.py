"""
Redis Integration

Async Redis client construction for the append store, and the arq
connection settings and pool used by the queues and audit streams.
"""

import logging

import redis.asyncio as aioredis
from arq import create_pool
from arq.connections import ArqRedis, RedisSettings

from app.config.settings import Settings

logger = logging.getLogger(__name__)


def create_async_redis_client(settings: Settings) -> aioredis.Redis:
    """
    Build an async Redis client. No connection is opened until first use.

    Returns:
        Async Redis client with decoded (str) responses
    """
    return aioredis.Redis(
        host=settings.REDIS_HOST,
        port=settings.REDIS_PORT,
        db=settings.REDIS_DB,
        password=settings.REDIS_PASSWORD,
        decode_responses=True,
        socket_connect_timeout=5.0,
    )


def get_arq_redis_settings(settings: Settings) -> RedisSettings:
    """Redis settings for arq pools and workers."""
    return RedisSettings(
        host=settings.REDIS_HOST,
        port=settings.REDIS_PORT,
        database=settings.REDIS_DB,
        password=settings.REDIS_PASSWORD,
        conn_timeout=5,
        conn_retry_delay=1,
    )


async def create_queue_pool(settings: Settings) -> ArqRedis:
    """
    Connect an arq pool for enqueueing jobs.

    Raises:
        redis.exceptions.ConnectionError: If Redis stays unreachable after arq's retries
    """
    pool = await create_pool(get_arq_redis_settings(settings))
    logger.info(f"arq pool connected to {settings.REDIS_HOST}:{settings.REDIS_PORT}/{settings.REDIS_DB}")
    return pool


async def check_redis_connection(client: aioredis.Redis) -> bool:
    """Ping Redis."""
    try:
        await client.ping()
        return True
    except (aioredis.ConnectionError, aioredis.TimeoutError) as e:
        logger.error(f"Async Redis connection failed: {e}")
        return False


async def close_redis_client(client: aioredis.Redis) -> None:
    """Close the client's connection pool."""
    await client.aclose()
    logger.info("Redis connection closed")


__all__ = [
    "create_async_redis_client",
    "create_queue_pool",
    "get_arq_redis_settings",
    "check_redis_connection",
    "close_redis_client",
]
