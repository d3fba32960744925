# ============================================================================
# SCOPE: APPLICATION LAYER (Appointment Scheduling)
# Description: Schedule persistence port (per-country relational store).
# ============================================================================
"""Schedule Repository Port."""

from datetime import date
from typing import Protocol, runtime_checkable

from app.domains.appointment_scheduling.domain.entities import Schedule
from app.domains.appointment_scheduling.domain.value_objects import CountryISO


@runtime_checkable
class IScheduleRepository(Protocol):
    """Schedule repository interface. Every call is scoped to one country."""

    async def find_by_schedule_id(self, schedule_id: int, country_iso: CountryISO) -> Schedule | None:
        """
        Find a schedule by id.

        Returns:
            Schedule if found in the country's store, None otherwise
        """
        ...

    async def find_available_schedules(
        self,
        country_iso: CountryISO,
        on_date: date | None = None,
    ) -> list[Schedule]:
        """
        List schedules not yet reserved.

        Args:
            country_iso: Country store to query
            on_date: Optional calendar day filter

        Returns:
            Unreserved schedules ordered by date
        """
        ...

    async def save(self, schedule: Schedule, country_iso: CountryISO) -> None:
        """Store a schedule in the country's store."""
        ...

    async def mark_as_reserved(self, schedule_id: int, country_iso: CountryISO) -> None:
        """
        Reserve a schedule atomically.

        Raises:
            ScheduleNotFoundError: If the schedule does not exist
            ScheduleAlreadyReservedError: If the schedule is already reserved
        """
        ...
