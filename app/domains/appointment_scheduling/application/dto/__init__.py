# ============================================================================
# SCOPE: APPLICATION LAYER (Appointment Scheduling)
# Description: DTO exports.
# ============================================================================
from .appointment_dtos import (
    AppointmentDTO,
    CompleteAppointmentDto,
    CompleteAppointmentResult,
    CreateAppointmentDto,
    CreateAppointmentResult,
    GetAppointmentsByInsuredIdDto,
    GetAppointmentsResult,
    ProcessCountryAppointmentDto,
    ProcessCountryAppointmentResult,
)

__all__ = [
    # Request DTOs
    "CreateAppointmentDto",
    "ProcessCountryAppointmentDto",
    "CompleteAppointmentDto",
    "GetAppointmentsByInsuredIdDto",
    # Response/Data DTOs
    "AppointmentDTO",
    # Result DTOs
    "CreateAppointmentResult",
    "ProcessCountryAppointmentResult",
    "CompleteAppointmentResult",
    "GetAppointmentsResult",
]
