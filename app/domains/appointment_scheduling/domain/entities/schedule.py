"""Schedule Entity.

A bookable slot (center, specialty, medic and date) in one country.
Identity is the schedule id.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Self

from app.core.domain.entities import Entity, utc_now

from ..exceptions import InvalidScheduleError

SCHEDULE_ID_MIN_VALUE = 1


def _is_positive_int(value: Any, minimum: int = 1) -> bool:
    # bool is an int subclass; True must not pass as id 1
    return isinstance(value, int) and not isinstance(value, bool) and value >= minimum


@dataclass(eq=False, kw_only=True)
class Schedule(Entity[int]):
    """Schedule slot.

    The constructor validates ids and the datetime type. ``create`` also
    rejects past dates; ``restore`` does not, so historical rows still load.
    """

    id: int
    center_id: int
    specialty_id: int
    medic_id: int
    date: datetime

    @staticmethod
    def validate_schedule_id(value: Any) -> int:
        """Return ``value`` if it is a usable schedule id.

        Raises:
            InvalidScheduleError: If it is not an integer >= SCHEDULE_ID_MIN_VALUE.
        """
        if not _is_positive_int(value, SCHEDULE_ID_MIN_VALUE):
            raise InvalidScheduleError(
                f"Schedule ID must be a positive integer starting from {SCHEDULE_ID_MIN_VALUE}",
                field="scheduleId",
            )
        return value

    def __post_init__(self) -> None:
        self.validate_schedule_id(self.id)
        if not _is_positive_int(self.center_id):
            raise InvalidScheduleError("Center ID must be a positive integer", field="centerId")
        if not _is_positive_int(self.specialty_id):
            raise InvalidScheduleError("Specialty ID must be a positive integer", field="specialtyId")
        if not _is_positive_int(self.medic_id):
            raise InvalidScheduleError("Medic ID must be a positive integer", field="medicId")
        if not isinstance(self.date, datetime):
            raise InvalidScheduleError("Date must be a valid datetime", field="date")
        if self.date.tzinfo is None:
            self.date = self.date.replace(tzinfo=UTC)

    @classmethod
    def create(
        cls,
        *,
        schedule_id: int,
        center_id: int,
        specialty_id: int,
        medic_id: int,
        date: datetime,
    ) -> Self:
        """Create a new schedule; the date must not be in the past."""
        schedule = cls(
            id=schedule_id,
            center_id=center_id,
            specialty_id=specialty_id,
            medic_id=medic_id,
            date=date,
        )
        if schedule.date < utc_now():
            raise InvalidScheduleError("Schedule date cannot be in the past", field="date")
        return schedule

    @classmethod
    def restore(
        cls,
        *,
        schedule_id: int,
        center_id: int,
        specialty_id: int,
        medic_id: int,
        date: datetime,
    ) -> Self:
        """Rehydrate a stored schedule without the past-date check."""
        return cls(
            id=schedule_id,
            center_id=center_id,
            specialty_id=specialty_id,
            medic_id=medic_id,
            date=date,
        )

    @classmethod
    def from_primitives(cls, data: dict[str, Any]) -> Self:
        date = data["date"]
        if isinstance(date, str):
            date = datetime.fromisoformat(date)
        return cls.restore(
            schedule_id=data["scheduleId"],
            center_id=data["centerId"],
            specialty_id=data["specialtyId"],
            medic_id=data["medicId"],
            date=date,
        )

    @property
    def schedule_id(self) -> int:
        return self.id

    def to_primitives(self) -> dict[str, Any]:
        return {
            "centerId": self.center_id,
            "date": self.date.isoformat(),
            "medicId": self.medic_id,
            "scheduleId": self.id,
            "specialtyId": self.specialty_id,
        }
