"""Appointment Status Value Object.

Defines the possible states of an appointment and their valid transitions.
"""

from typing import Self

from app.core.domain.value_objects import StatusEnum

from ..exceptions import InvalidAppointmentStatusError


class AppointmentStatus(StatusEnum):
    """Appointment lifecycle states."""

    PENDING = "pending"  # Stored in the append store, waiting for its country
    PROCESSED = "processed"  # Confirmed in the country store, schedule reserved
    COMPLETED = "completed"  # Append store caught up with the country store
    SCHEDULED = "scheduled"  # Legacy rows only

    @classmethod
    def from_string(cls, value: str) -> Self:
        if not value:
            raise InvalidAppointmentStatusError("")
        try:
            return super().from_string(value)
        except ValueError:
            raise InvalidAppointmentStatusError(value) from None

    def can_transition_to(self, new_status: "AppointmentStatus") -> bool:
        """Validate a state transition.

        State machine:
        - pending -> processed
        - processed -> completed
        - completed -> (final state)
        - scheduled -> (legacy, no transitions)
        """
        transitions: dict[str, list[str]] = {
            "pending": ["processed"],
            "processed": ["completed"],
            "completed": [],
            "scheduled": [],
        }
        return new_status.value in transitions.get(self.value, [])

    def is_final(self) -> bool:
        return self is AppointmentStatus.COMPLETED

    def has_been_processed(self) -> bool:
        """Whether the country store has confirmed the appointment."""
        return self in (AppointmentStatus.PROCESSED, AppointmentStatus.COMPLETED)
