"""
Saga job handlers.

One handler per queue. Each job builds its adapters from the container
(one DB session per job) and runs the matching use case. Exceptions
propagate to the job runner, which decides between finishing and retrying.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from app.core.domain.exceptions import ValidationException
from app.core.shared.logger import mask_insured_id
from app.domains.appointment_scheduling.application.dto import (
    CompleteAppointmentResult,
    ProcessCountryAppointmentResult,
)
from app.domains.appointment_scheduling.application.messages import (
    parse_appointment_message,
    parse_completion_message,
)
from app.domains.appointment_scheduling.domain.value_objects import CountryISO

if TYPE_CHECKING:
    from app.core.container import AppointmentContainer

    from ..messaging.codec import QueueMessage

logger = logging.getLogger(__name__)


class CountryAppointmentHandler:
    """Handles the queue of one country."""

    def __init__(self, container: AppointmentContainer, country_iso: CountryISO):
        self._container = container
        self.country_iso = country_iso

    async def __call__(self, message: QueueMessage) -> ProcessCountryAppointmentResult:
        parsed = parse_appointment_message(message.body)
        if parsed.country_iso != self.country_iso.value:
            raise ValidationException(
                f"Message for {parsed.country_iso} received on the {self.country_iso} queue",
                field="countryISO",
            )

        logger.info(
            f"Processing appointment {parsed.appointment_id} for insured "
            f"{mask_insured_id(parsed.insured_id)} in {self.country_iso}"
        )
        async with self._container.session() as session:
            use_case = self._container.create_process_country_appointment_use_case(session, self.country_iso)
            result = await use_case.execute(parsed.to_process_dto())

        logger.info(f"{result.message} (appointment {result.appointment_id})")
        return result


class CompletionHandler:
    """Handles the completion queue."""

    def __init__(self, container: AppointmentContainer):
        self._container = container

    async def __call__(self, message: QueueMessage) -> CompleteAppointmentResult | None:
        dto = parse_completion_message(message.body)
        if dto is None:
            return None

        use_case = self._container.create_complete_appointment_use_case()
        result = await use_case.execute(dto)
        logger.info(f"{result.message} (appointment {result.appointment_id})")
        return result
