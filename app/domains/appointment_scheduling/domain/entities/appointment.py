"""Appointment Entity - Aggregate Root.

Owns the appointment status state machine:

    pending -> processed -> completed

``processed_at`` is set exactly once, when the appointment leaves
``pending``, and is present if and only if the status is processed or
completed.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Self

from app.core.domain.entities import AggregateRoot, utc_now

from ..exceptions import AppointmentStatusTransitionError, InvalidAppointmentStateError
from ..value_objects import AppointmentId, AppointmentStatus, CountryISO, InsuredId
from .insured import Insured
from .schedule import Schedule


def _parse_datetime(value: Any) -> datetime | None:
    if value is None or isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


@dataclass(eq=False, kw_only=True)
class Appointment(AggregateRoot[AppointmentId]):
    """Medical appointment - Aggregate Root.

    Equality is by appointment id only.
    """

    id: AppointmentId
    insured: Insured
    schedule: Schedule
    status: AppointmentStatus = AppointmentStatus.PENDING
    processed_at: datetime | None = None

    def __post_init__(self) -> None:
        if self.status.has_been_processed() != (self.processed_at is not None):
            raise InvalidAppointmentStateError(
                f"Appointment {self.id} in status {self.status} "
                f"{'requires' if self.processed_at is None else 'cannot have'} a processed_at timestamp"
            )

    @classmethod
    def create(cls, insured: Insured, schedule: Schedule) -> Self:
        """Create a new pending appointment with a fresh id."""
        now = utc_now()
        return cls(
            id=AppointmentId.generate(),
            insured=insured,
            schedule=schedule,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def from_primitives(cls, data: dict[str, Any]) -> Self:
        """Rehydrate an appointment from its stored form.

        Raises:
            ValidationException: If any attribute is invalid or the stored
                status and ``processedAt`` disagree.
        """
        return cls(
            id=AppointmentId.from_string(data["appointmentId"]),
            insured=Insured.from_primitives(data["countryISO"], data["insuredId"]),
            schedule=Schedule.from_primitives(data["schedule"]),
            status=AppointmentStatus.from_string(data["status"]),
            processed_at=_parse_datetime(data.get("processedAt")),
            created_at=_parse_datetime(data["createdAt"]),
            updated_at=_parse_datetime(data["updatedAt"]),
        )

    # State transitions
    def _transition_to(self, target: AppointmentStatus) -> None:
        if not self.status.can_transition_to(target):
            raise AppointmentStatusTransitionError(self.status.value, target.value)
        self.status = target

    def mark_as_processed(self, at: datetime | None = None) -> None:
        """Move ``pending -> processed`` and stamp ``processed_at``.

        Raises:
            AppointmentStatusTransitionError: If the appointment is not pending.
        """
        self._transition_to(AppointmentStatus.PROCESSED)
        now = at or utc_now()
        self.processed_at = now
        self.touch(now)

    def mark_as_completed(self, at: datetime | None = None) -> None:
        """Move ``processed -> completed``.

        Raises:
            AppointmentStatusTransitionError: If the appointment is not processed.
        """
        self._transition_to(AppointmentStatus.COMPLETED)
        self.touch(at)

    # Query methods
    @property
    def appointment_id(self) -> AppointmentId:
        return self.id

    @property
    def country_iso(self) -> CountryISO:
        return self.insured.country_iso

    @property
    def insured_id(self) -> InsuredId:
        return self.insured.insured_id

    @property
    def schedule_id(self) -> int:
        return self.schedule.schedule_id

    def is_pending(self) -> bool:
        return self.status is AppointmentStatus.PENDING

    def is_processed(self) -> bool:
        return self.status is AppointmentStatus.PROCESSED

    def is_completed(self) -> bool:
        return self.status is AppointmentStatus.COMPLETED

    # Serialization
    def to_primitives(self) -> dict[str, Any]:
        return {
            "appointmentId": self.id.value,
            **self.insured.to_primitives(),
            "createdAt": self.created_at.isoformat(),
            "processedAt": self.processed_at.isoformat() if self.processed_at else None,
            "schedule": self.schedule.to_primitives(),
            "status": self.status.value,
            "updatedAt": self.updated_at.isoformat(),
        }

    def to_log_safe_dict(self) -> dict[str, Any]:
        return {
            "appointmentId": self.id.value,
            **self.insured.to_log_safe_dict(),
            "processedAt": self.processed_at.isoformat() if self.processed_at else None,
            "scheduleId": self.schedule_id,
            "status": self.status.value,
        }
