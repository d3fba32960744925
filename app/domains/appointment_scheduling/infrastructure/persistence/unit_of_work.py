"""
SQLAlchemy Unit of Work

Commits the shared session when the block succeeds, rolls it back otherwise.
"""

import logging
from types import TracebackType
from typing import Self

from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


class SQLAlchemyUnitOfWork:
    """Unit of work over one async session shared by the country repositories."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc is None:
            await self.session.commit()
            return

        logger.warning(f"Rolling back unit of work: {exc_type.__name__ if exc_type else 'unknown'}: {exc}")
        await self.session.rollback()
