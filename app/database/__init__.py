"""
Database package: async engine, sessions and schema bootstrap.
"""

from .async_db import (
    check_db_connection,
    create_async_database_engine,
    create_session_factory,
    get_async_database_url,
    session_scope,
)

__all__ = [
    "check_db_connection",
    "create_async_database_engine",
    "create_session_factory",
    "get_async_database_url",
    "session_scope",
]
