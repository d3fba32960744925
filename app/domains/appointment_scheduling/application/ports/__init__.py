# ============================================================================
# SCOPE: APPLICATION LAYER (Appointment Scheduling)
# Description: Ports (interfaces) implemented by the infrastructure layer.
# ============================================================================
"""Appointment Scheduling Application Ports."""

from .appointment_repository import IAppointmentRepository
from .event_bus import IEventBus
from .messaging import IMessagingPort
from .schedule_repository import IScheduleRepository
from .unit_of_work import IUnitOfWork

__all__ = [
    "IAppointmentRepository",
    "IEventBus",
    "IMessagingPort",
    "IScheduleRepository",
    "IUnitOfWork",
]
