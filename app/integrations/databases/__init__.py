"""
Database integrations module.

Client construction for the external stores used by the application.
"""

from .redis import check_redis_connection, close_redis_client, create_async_redis_client

__all__ = ["check_redis_connection", "close_redis_client", "create_async_redis_client"]
