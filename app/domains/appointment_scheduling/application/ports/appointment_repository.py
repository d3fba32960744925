# ============================================================================
# SCOPE: APPLICATION LAYER (Appointment Scheduling)
# Description: Appointment persistence port.
# ============================================================================
"""
Appointment Repository Port

Implemented twice: by the append store that records every request, and by
the per-country relational store that records confirmed appointments.
"""

from typing import Protocol, runtime_checkable

from app.domains.appointment_scheduling.domain.entities import Appointment


@runtime_checkable
class IAppointmentRepository(Protocol):
    """
    Appointment repository interface.

    Example:
        ```python
        class RedisAppointmentRepository(IAppointmentRepository):
            async def find_by_appointment_id(self, appointment_id: str) -> Appointment | None:
                ...
        ```
    """

    async def find_by_appointment_id(self, appointment_id: str) -> Appointment | None:
        """
        Find appointment by its id.

        Returns:
            Appointment if found, None otherwise
        """
        ...

    async def find_by_insured_id(self, insured_id: str) -> list[Appointment]:
        """
        Find every appointment of an insured patient.

        Args:
            insured_id: Normalized five digit insured id

        Returns:
            Appointments ordered by creation time
        """
        ...

    async def save(self, appointment: Appointment) -> None:
        """
        Store a new appointment.

        Saving an id that is already stored must not create a second record.
        """
        ...

    async def update(self, appointment: Appointment) -> None:
        """
        Replace a stored appointment.

        Raises:
            AppointmentNotFoundError: If the appointment was never saved
        """
        ...
