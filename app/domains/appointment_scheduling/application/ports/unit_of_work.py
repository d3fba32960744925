# ============================================================================
# SCOPE: APPLICATION LAYER (Appointment Scheduling)
# Description: Unit of work port.
# ============================================================================
"""Unit of Work Port."""

from types import TracebackType
from typing import Protocol, Self, runtime_checkable


@runtime_checkable
class IUnitOfWork(Protocol):
    """
    Async context manager around one transaction.

    Commits on a clean exit and rolls back when the block raises.

    Example:
        ```python
        async with unit_of_work:
            await appointments.save(appointment)
            await schedules.mark_as_reserved(schedule_id, country)
        ```
    """

    async def __aenter__(self) -> Self: ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None: ...
