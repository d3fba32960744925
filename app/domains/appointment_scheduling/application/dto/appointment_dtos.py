# ============================================================================
# SCOPE: APPLICATION LAYER (Appointment Scheduling)
# Description: Data Transfer Objects for the appointment saga.
# ============================================================================
"""Appointment DTOs.

Plain data crossing the use case boundary. Ids arrive as raw primitives and
are validated by the use cases through the domain value objects.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Self

from app.domains.appointment_scheduling.domain.entities import Appointment

# =============================================================================
# Request DTOs
# =============================================================================


@dataclass(frozen=True)
class CreateAppointmentDto:
    """Request DTO for booking a new appointment."""

    country_iso: str
    insured_id: str  # may be un-padded, e.g. "123"
    schedule_id: int


@dataclass(frozen=True)
class ProcessCountryAppointmentDto:
    """Request DTO for confirming an appointment in its country store."""

    appointment_id: str
    insured_id: str
    country_iso: str
    schedule_id: int


@dataclass(frozen=True)
class CompleteAppointmentDto:
    """Request DTO for completing an appointment in the append store."""

    appointment_id: str
    insured_id: str
    country_iso: str
    schedule_id: int
    processed_at: datetime | None = None  # when the country worker confirmed it


@dataclass(frozen=True)
class GetAppointmentsByInsuredIdDto:
    insured_id: str


# =============================================================================
# Response/Data DTOs
# =============================================================================


@dataclass(frozen=True)
class AppointmentDTO:
    """Appointment as returned to API clients."""

    appointment_id: str
    insured_id: str
    country_iso: str
    schedule_id: int
    status: str
    created_at: str
    updated_at: str
    processed_at: str | None = None
    schedule: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_entity(cls, appointment: Appointment) -> Self:
        return cls(
            appointment_id=appointment.id.value,
            insured_id=appointment.insured_id.value,
            country_iso=appointment.country_iso.value,
            schedule_id=appointment.schedule_id,
            status=appointment.status.value,
            created_at=appointment.created_at.isoformat(),
            updated_at=appointment.updated_at.isoformat(),
            processed_at=appointment.processed_at.isoformat() if appointment.processed_at else None,
            schedule=appointment.schedule.to_primitives(),
        )


# =============================================================================
# Result DTOs
# =============================================================================


@dataclass(frozen=True)
class CreateAppointmentResult:
    appointment_id: str
    status: str
    message: str


@dataclass(frozen=True)
class ProcessCountryAppointmentResult:
    appointment_id: str
    country_iso: str
    status: str
    message: str
    already_processed: bool = False


@dataclass(frozen=True)
class CompleteAppointmentResult:
    appointment_id: str
    country_iso: str
    status: str
    message: str


@dataclass(frozen=True)
class GetAppointmentsResult:
    appointments: list[AppointmentDTO] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.appointments)
