"""Appointment Domain Service.

Pure domain logic for the saga steps. Every operation returns the mutated
aggregate together with the events it produced; publishing them is up to
the caller.
"""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from app.core.domain.entities import utc_now
from app.core.domain.events import DomainEvent
from app.core.domain.exceptions import BusinessRuleViolationException

from ..entities import Appointment, Insured, Schedule
from ..events import AppointmentCompleted, AppointmentCreated, AppointmentProcessed
from ..exceptions import AppointmentStatusTransitionError
from ..value_objects import AppointmentStatus, CountryISO
from .country_rules import COUNTRY_RULES, CountryRule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DomainResult:
    appointment: Appointment
    events: list[DomainEvent[Any]] = field(default_factory=list)


class AppointmentDomainService:
    """Domain service for appointment lifecycle operations."""

    def __init__(self, country_rules: Mapping[CountryISO, CountryRule] = COUNTRY_RULES) -> None:
        self._country_rules = country_rules

    def validate_appointment_creation(self, insured: Insured, schedule: Schedule) -> None:
        """Check the booking rules for a new appointment.

        Raises:
            BusinessRuleViolationException: If the schedule is not in the
                future or the country rule rejects it.
        """
        if schedule.date <= utc_now():
            raise BusinessRuleViolationException(
                "schedule_in_future",
                "Cannot create appointment for past dates",
                {"scheduleId": schedule.schedule_id},
            )
        self._country_rules[insured.country_iso](schedule)

    def create_appointment(self, insured: Insured, schedule: Schedule) -> DomainResult:
        self.validate_appointment_creation(insured, schedule)

        appointment = Appointment.create(insured, schedule)
        event = DomainEvent(
            AppointmentCreated(
                appointment_id=appointment.id.value,
                country_iso=appointment.country_iso.value,
                insured_id=appointment.insured_id.value,
                schedule_id=appointment.schedule_id,
            )
        )
        logger.debug(f"Appointment created: {appointment.to_log_safe_dict()}")
        return DomainResult(appointment, [event])

    def process_appointment(self, appointment: Appointment, at: datetime | None = None) -> DomainResult:
        appointment.mark_as_processed(at)
        return DomainResult(appointment, [self.processed_event(appointment)])

    def processed_event(self, appointment: Appointment) -> DomainEvent[AppointmentProcessed]:
        """Build the event announcing an already processed appointment."""
        if appointment.processed_at is None:
            raise AppointmentStatusTransitionError(appointment.status.value, AppointmentStatus.PROCESSED.value)
        return DomainEvent(
            AppointmentProcessed(
                appointment_id=appointment.id.value,
                country_iso=appointment.country_iso.value,
                insured_id=appointment.insured_id.value,
                schedule_id=appointment.schedule_id,
                processed_at=appointment.processed_at,
            )
        )

    def complete_appointment(self, appointment: Appointment) -> DomainResult:
        appointment.mark_as_completed()

        event = DomainEvent(
            AppointmentCompleted(
                appointment_id=appointment.id.value,
                country_iso=appointment.country_iso.value,
                insured_id=appointment.insured_id.value,
                schedule_id=appointment.schedule_id,
                completed_at=appointment.updated_at,
            )
        )
        return DomainResult(appointment, [event])
