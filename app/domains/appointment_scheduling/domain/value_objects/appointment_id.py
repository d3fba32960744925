"""Appointment Id Value Object."""

import re
from dataclasses import dataclass
from typing import Self

from app.core.domain.entities import generate_uuid_str
from app.core.domain.value_objects import ValueObject

from ..exceptions import InvalidAppointmentIdError

_UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


@dataclass(frozen=True)
class AppointmentId(ValueObject):
    """UUID identifying an appointment across every store and message."""

    value: str

    def _validate(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise InvalidAppointmentIdError("Appointment ID cannot be empty")
        if not _UUID_PATTERN.match(self.value):
            raise InvalidAppointmentIdError()

    @classmethod
    def generate(cls) -> Self:
        return cls(generate_uuid_str())

    @classmethod
    def from_string(cls, value: str) -> Self:
        return cls(value)

    def __str__(self) -> str:
        return self.value
