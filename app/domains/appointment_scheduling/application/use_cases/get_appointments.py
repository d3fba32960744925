# ============================================================================
# SCOPE: APPLICATION LAYER (Appointment Scheduling)
# Description: Use case for listing an insured patient's appointments.
# ============================================================================
"""Get Appointments By Insured Id Use Case."""

import logging
from typing import TYPE_CHECKING

from app.domains.appointment_scheduling.domain.value_objects import InsuredId

from ..dto import AppointmentDTO, GetAppointmentsByInsuredIdDto, GetAppointmentsResult

if TYPE_CHECKING:
    from ..ports import IAppointmentRepository

logger = logging.getLogger(__name__)


class GetAppointmentsByInsuredIdUseCase:
    """Lists appointments from the append store."""

    def __init__(self, appointment_repository: "IAppointmentRepository") -> None:
        self._appointments = appointment_repository

    async def execute(self, request: GetAppointmentsByInsuredIdDto) -> GetAppointmentsResult:
        insured_id = InsuredId.from_string(request.insured_id)

        appointments = await self._appointments.find_by_insured_id(insured_id.value)

        logger.info(f"Found {len(appointments)} appointments for insured {insured_id.masked}")
        return GetAppointmentsResult(appointments=[AppointmentDTO.from_entity(a) for a in appointments])
