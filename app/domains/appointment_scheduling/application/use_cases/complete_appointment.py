# ============================================================================
# SCOPE: APPLICATION LAYER (Appointment Scheduling)
# Description: Use case for completing an appointment in the append store.
# ============================================================================
"""Complete Appointment Use Case.

Consumes the completion queue and brings the append store record in line
with the country store: ``pending`` records are first caught up to
``processed``, keeping the country worker's ``processedAt`` when the message
carries one, and then moved to ``completed``.
"""

import logging
from typing import TYPE_CHECKING

from app.core.domain.exceptions import ValidationException
from app.domains.appointment_scheduling.domain.exceptions import AppointmentNotFoundError
from app.domains.appointment_scheduling.domain.services import AppointmentDomainService
from app.domains.appointment_scheduling.domain.value_objects import AppointmentId, CountryISO

from ..dto import CompleteAppointmentDto, CompleteAppointmentResult

if TYPE_CHECKING:
    from ..ports import IAppointmentRepository, IEventBus

logger = logging.getLogger(__name__)


class CompleteAppointmentUseCase:
    """Use case for completing a processed appointment."""

    def __init__(
        self,
        appointment_repository: "IAppointmentRepository",
        event_bus: "IEventBus",
        domain_service: AppointmentDomainService | None = None,
    ) -> None:
        self._appointments = appointment_repository
        self._event_bus = event_bus
        self._domain_service = domain_service or AppointmentDomainService()

    async def execute(self, request: CompleteAppointmentDto) -> CompleteAppointmentResult:
        """Execute the complete use case.

        Raises:
            AppointmentNotFoundError: The append store has no such record yet.
            ValidationException: The message country does not match the record.
            AppointmentStatusTransitionError: The record cannot be completed.
        """
        appointment_id = AppointmentId.from_string(request.appointment_id)
        country_iso = CountryISO.from_string(request.country_iso)

        appointment = await self._appointments.find_by_appointment_id(appointment_id.value)
        if appointment is None:
            raise AppointmentNotFoundError(appointment_id.value)

        if appointment.country_iso is not country_iso:
            raise ValidationException(
                f"Appointment {appointment_id} belongs to {appointment.country_iso}, not {country_iso}",
                field="countryISO",
            )

        if appointment.is_completed():
            logger.info(f"Appointment {appointment_id} already completed, nothing to do")
            return self._result(appointment_id, country_iso, "Appointment already completed")

        if appointment.is_pending():
            self._domain_service.process_appointment(appointment, at=request.processed_at)

        result = self._domain_service.complete_appointment(appointment)
        await self._appointments.update(appointment)

        for event in result.events:
            await self._event_bus.publish(event)

        logger.info(f"Appointment completed: {appointment.to_log_safe_dict()}")
        return self._result(appointment_id, country_iso, "Appointment completed successfully")

    @staticmethod
    def _result(appointment_id: AppointmentId, country_iso: CountryISO, message: str) -> CompleteAppointmentResult:
        return CompleteAppointmentResult(
            appointment_id=appointment_id.value,
            country_iso=country_iso.value,
            status="completed",
            message=message,
        )
