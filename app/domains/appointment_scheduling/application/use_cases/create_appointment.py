# ============================================================================
# SCOPE: APPLICATION LAYER (Appointment Scheduling)
# Description: Use case for requesting a new appointment.
# ============================================================================
"""Create Appointment Use Case.

Records the request in the append store as ``pending`` and publishes it to
the fan-out topic, which routes it to the country queue.
"""

import logging
from typing import TYPE_CHECKING

from app.domains.appointment_scheduling.domain.entities import Insured, Schedule
from app.domains.appointment_scheduling.domain.exceptions import ScheduleNotFoundError
from app.domains.appointment_scheduling.domain.services import AppointmentDomainService
from app.domains.appointment_scheduling.domain.value_objects import CountryISO, InsuredId

from ..dto import CreateAppointmentDto, CreateAppointmentResult

if TYPE_CHECKING:
    from ..ports import IAppointmentRepository, IMessagingPort, IScheduleRepository

logger = logging.getLogger(__name__)

CREATED_MESSAGE = "Appointment scheduling is in process"
CREATED_EVENT_TYPE = "AppointmentCreated"


class CreateAppointmentUseCase:
    """Use case for creating an appointment request."""

    def __init__(
        self,
        appointment_repository: "IAppointmentRepository",
        schedule_repository: "IScheduleRepository",
        messaging: "IMessagingPort",
        domain_service: AppointmentDomainService | None = None,
    ) -> None:
        """Initialize use case.

        Args:
            appointment_repository: Append store.
            schedule_repository: Country schedule lookup.
            messaging: Fan-out topic.
            domain_service: Domain service; a default one is built if omitted.
        """
        self._appointments = appointment_repository
        self._schedules = schedule_repository
        self._messaging = messaging
        self._domain_service = domain_service or AppointmentDomainService()

    async def execute(self, request: CreateAppointmentDto) -> CreateAppointmentResult:
        """Execute the create appointment use case.

        Raises:
            ValidationException: Invalid insured id, country or schedule id.
            ScheduleNotFoundError: Unknown schedule for the country.
            BusinessRuleViolationException: Past date or country rule.
        """
        country_iso = CountryISO.from_string(request.country_iso)
        insured = Insured(country_iso=country_iso, insured_id=InsuredId.from_string(request.insured_id))
        schedule_id = Schedule.validate_schedule_id(request.schedule_id)

        logger.info(
            f"Creating appointment for insured {insured.insured_id.masked} "
            f"in {country_iso} (schedule {schedule_id})"
        )

        schedule = await self._schedules.find_by_schedule_id(schedule_id, country_iso)
        if schedule is None:
            raise ScheduleNotFoundError(schedule_id, country_iso.value)

        result = self._domain_service.create_appointment(insured, schedule)
        appointment = result.appointment

        await self._appointments.save(appointment)

        payload = {
            **result.events[0].to_primitives(),
            "eventType": CREATED_EVENT_TYPE,
            "status": appointment.status.value,
        }
        try:
            await self._messaging.publish_to_country_specific_topic(payload, country_iso, CREATED_EVENT_TYPE)
        except Exception:
            # Stored but never routed: must be re-driven from the append store
            logger.exception(
                f"Appointment {appointment.id} saved as pending but publishing to {country_iso} failed"
            )
            raise

        logger.info(f"Appointment created: {appointment.to_log_safe_dict()}")

        return CreateAppointmentResult(
            appointment_id=appointment.id.value,
            status=appointment.status.value,
            message=CREATED_MESSAGE,
        )
