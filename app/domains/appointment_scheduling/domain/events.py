"""Appointment domain event payloads.

All three travel inside the shared ``DomainEvent`` envelope. The wire form is
camelCase, with ``countryISO`` spelled the way downstream consumers route on it.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar

from app.core.domain.events import EventPayload

COUNTRY_ISO_ALIAS = {"alias": "countryISO"}


@dataclass(frozen=True)
class AppointmentCreated(EventPayload):
    EVENT_NAME: ClassVar[str] = "appointment.created"

    appointment_id: str
    country_iso: str = field(metadata=COUNTRY_ISO_ALIAS)
    insured_id: str
    schedule_id: int


@dataclass(frozen=True)
class AppointmentProcessed(EventPayload):
    EVENT_NAME: ClassVar[str] = "appointment.processed"

    appointment_id: str
    country_iso: str = field(metadata=COUNTRY_ISO_ALIAS)
    insured_id: str
    schedule_id: int
    processed_at: datetime
    status: str = "processed"


@dataclass(frozen=True)
class AppointmentCompleted(EventPayload):
    EVENT_NAME: ClassVar[str] = "appointment.completed"

    appointment_id: str
    country_iso: str = field(metadata=COUNTRY_ISO_ALIAS)
    insured_id: str
    schedule_id: int
    completed_at: datetime
