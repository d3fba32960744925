# ============================================================================
# SCOPE: APPLICATION LAYER (Appointment Scheduling)
# Description: Use Cases exports.
# ============================================================================
"""Application Use Cases for the Appointment Scheduling domain."""

from .complete_appointment import CompleteAppointmentUseCase
from .create_appointment import CreateAppointmentUseCase
from .get_appointments import GetAppointmentsByInsuredIdUseCase
from .process_country_appointment import ProcessCountryAppointmentUseCase

__all__ = [
    "CompleteAppointmentUseCase",
    "CreateAppointmentUseCase",
    "GetAppointmentsByInsuredIdUseCase",
    "ProcessCountryAppointmentUseCase",
]
