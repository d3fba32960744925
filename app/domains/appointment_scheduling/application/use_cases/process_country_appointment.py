# ============================================================================
# SCOPE: APPLICATION LAYER (Appointment Scheduling)
# Description: Use case for confirming an appointment in its country store.
# ============================================================================
"""Process Country Appointment Use Case.

Consumes a country queue message: stores the appointment as ``processed`` in
the country relational store, reserves its schedule and announces the result
on the completion bus.

Redelivery is safe. When the country store already holds the appointment,
the writes are skipped and only the completion event is published again.
"""

import logging
from typing import TYPE_CHECKING

from app.domains.appointment_scheduling.domain.entities import Appointment, Insured
from app.domains.appointment_scheduling.domain.exceptions import ScheduleNotFoundError
from app.domains.appointment_scheduling.domain.services import AppointmentDomainService
from app.domains.appointment_scheduling.domain.value_objects import AppointmentId, CountryISO, InsuredId

from ..dto import ProcessCountryAppointmentDto, ProcessCountryAppointmentResult

if TYPE_CHECKING:
    from ..ports import IAppointmentRepository, IEventBus, IScheduleRepository, IUnitOfWork

logger = logging.getLogger(__name__)


class ProcessCountryAppointmentUseCase:
    """Use case for processing an appointment in one country."""

    def __init__(
        self,
        appointment_repository: "IAppointmentRepository",
        schedule_repository: "IScheduleRepository",
        event_bus: "IEventBus",
        unit_of_work: "IUnitOfWork",
        domain_service: AppointmentDomainService | None = None,
    ) -> None:
        """Initialize use case.

        Args:
            appointment_repository: Country relational store.
            schedule_repository: Country schedules, sharing the unit of work.
            event_bus: Completion bus.
            unit_of_work: Transaction spanning both repositories.
            domain_service: Domain service; a default one is built if omitted.
        """
        self._appointments = appointment_repository
        self._schedules = schedule_repository
        self._event_bus = event_bus
        self._unit_of_work = unit_of_work
        self._domain_service = domain_service or AppointmentDomainService()

    async def execute(self, request: ProcessCountryAppointmentDto) -> ProcessCountryAppointmentResult:
        """Execute the process use case.

        Raises:
            ValidationException: Invalid ids or country.
            ScheduleNotFoundError: Unknown schedule; nothing is written.
            ScheduleAlreadyReservedError: Schedule taken by another appointment.
        """
        appointment_id = AppointmentId.from_string(request.appointment_id)
        country_iso = CountryISO.from_string(request.country_iso)
        insured = Insured(country_iso=country_iso, insured_id=InsuredId.from_string(request.insured_id))

        schedule = await self._schedules.find_by_schedule_id(request.schedule_id, country_iso)
        if schedule is None:
            raise ScheduleNotFoundError(request.schedule_id, country_iso.value)

        existing = await self._appointments.find_by_appointment_id(appointment_id.value)
        if existing is not None:
            logger.info(
                f"Appointment {appointment_id} already processed in {country_iso}, re-publishing completion event"
            )
            await self._event_bus.publish(self._domain_service.processed_event(existing))
            return self._result(appointment_id, country_iso, already_processed=True)

        appointment = Appointment(id=appointment_id, insured=insured, schedule=schedule)
        result = self._domain_service.process_appointment(appointment)

        async with self._unit_of_work:
            await self._appointments.save(appointment)
            await self._schedules.mark_as_reserved(schedule.schedule_id, country_iso)

        for event in result.events:
            await self._event_bus.publish(event)

        logger.info(f"Appointment processed: {appointment.to_log_safe_dict()}")
        return self._result(appointment_id, country_iso)

    @staticmethod
    def _result(
        appointment_id: AppointmentId,
        country_iso: CountryISO,
        already_processed: bool = False,
    ) -> ProcessCountryAppointmentResult:
        return ProcessCountryAppointmentResult(
            appointment_id=appointment_id.value,
            country_iso=country_iso.value,
            status="processed",
            message=f"Appointment processed successfully for {country_iso}",
            already_processed=already_processed,
        )
