"""Appointment scheduling errors.

Every error specializes one of the shared domain exceptions so the API layer
and the stream consumers can classify it without knowing this module.
"""

from app.core.domain.exceptions import (
    AppointmentConflictException,
    EntityNotFoundException,
    InvalidOperationException,
    ValidationException,
)


class InvalidAppointmentIdError(ValidationException):
    def __init__(self, message: str = "Invalid appointment ID format"):
        super().__init__(message, field="appointmentId")


class InvalidInsuredIdError(ValidationException):
    def __init__(self, message: str):
        super().__init__(message, field="insuredId")


class UnsupportedCountryError(ValidationException):
    def __init__(self, country_iso: str):
        super().__init__(
            f"Country {country_iso} is not supported. Only PE and CL are allowed.",
            field="countryISO",
        )
        self.country_iso = country_iso


class InvalidAppointmentStatusError(ValidationException):
    def __init__(self, status: str):
        super().__init__(
            f"Invalid appointment status: {status}. Must be one of: pending, processed, completed.",
            field="status",
        )


class InvalidScheduleError(ValidationException):
    """Raised when a schedule attribute fails validation."""

    def __init__(self, message: str, field: str):
        super().__init__(f"Invalid schedule: {message}", field=field)


class InvalidAppointmentStateError(ValidationException):
    """Raised when persisted appointment data breaks the aggregate invariants."""

    def __init__(self, message: str):
        super().__init__(message, field="processedAt")


class AppointmentStatusTransitionError(InvalidOperationException):
    def __init__(self, current_status: str, target_status: str):
        super().__init__(
            operation=f"transition_to_{target_status}",
            current_state=current_status,
            message=f"Cannot transition from {current_status} to {target_status}.",
        )
        self.target_status = target_status


class ScheduleNotFoundError(EntityNotFoundException):
    def __init__(self, schedule_id: int, country_iso: str):
        super().__init__(
            "Schedule",
            schedule_id,
            message=f"Schedule with ID {schedule_id} not found for country {country_iso}",
        )
        self.details["country_iso"] = country_iso


class AppointmentNotFoundError(EntityNotFoundException):
    def __init__(self, appointment_id: str):
        super().__init__(
            "Appointment",
            appointment_id,
            message=f"Appointment with ID {appointment_id} not found.",
        )


class ScheduleAlreadyReservedError(AppointmentConflictException):
    def __init__(self, schedule_id: int, country_iso: str):
        super().__init__(
            schedule_id=schedule_id,
            country_iso=country_iso,
            message=f"Schedule with ID {schedule_id} is already reserved for country {country_iso}",
        )
