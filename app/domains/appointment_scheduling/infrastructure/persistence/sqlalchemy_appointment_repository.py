"""
Country Appointment Repository

SQLAlchemy implementation of IAppointmentRepository for one country's
relational store. Rows hold confirmed (processed) appointments.
"""

import logging

from sqlalchemy import select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain.exceptions import ValidationException
from app.domains.appointment_scheduling.domain.entities import Appointment, Insured, Schedule
from app.domains.appointment_scheduling.domain.exceptions import AppointmentNotFoundError
from app.domains.appointment_scheduling.domain.value_objects import (
    AppointmentId,
    AppointmentStatus,
    CountryISO,
    InsuredId,
)

from .sqlalchemy.models import AppointmentRecordMixin, models_for

logger = logging.getLogger(__name__)


class SQLAlchemyCountryAppointmentRepository:
    """
    Appointment repository bound to one country's schema.

    ``save`` is an upsert keyed by ``appointment_id``: saving the same
    appointment twice leaves a single row.
    """

    def __init__(self, session: AsyncSession, country_iso: CountryISO):
        """
        Initialize repository.

        Args:
            session: SQLAlchemy async session (shared with the unit of work)
            country_iso: Country whose schema this repository reads and writes
        """
        self.session = session
        self.country_iso = country_iso
        self.model = models_for(country_iso).appointment

    async def find_by_appointment_id(self, appointment_id: str) -> Appointment | None:
        result = await self.session.execute(select(self.model).where(self.model.appointment_id == appointment_id))
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def find_by_insured_id(self, insured_id: str) -> list[Appointment]:
        result = await self.session.execute(
            select(self.model).where(self.model.insured_id == insured_id).order_by(self.model.created_at)
        )
        return [self._to_entity(m) for m in result.scalars().all()]

    async def save(self, appointment: Appointment) -> None:
        self._check_country(appointment)
        stmt = (
            pg_insert(self.model)
            .values(**self._to_values(appointment))
            .on_conflict_do_nothing(index_elements=["appointment_id"])
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            logger.info(f"Appointment {appointment.id} already stored in {self.country_iso}, insert skipped")

    async def update(self, appointment: Appointment) -> None:
        self._check_country(appointment)
        stmt = (
            update(self.model)
            .where(self.model.appointment_id == appointment.id.value)
            .values(
                status=appointment.status.value,
                processed_at=appointment.processed_at,
                updated_at=appointment.updated_at,
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            raise AppointmentNotFoundError(appointment.id.value)

    def _check_country(self, appointment: Appointment) -> None:
        if appointment.country_iso is not self.country_iso:
            raise ValidationException(
                f"Appointment {appointment.id} belongs to {appointment.country_iso}, "
                f"not to the {self.country_iso} store",
                field="countryISO",
            )

    def _to_values(self, appointment: Appointment) -> dict:
        schedule = appointment.schedule
        return {
            "appointment_id": appointment.id.value,
            "insured_id": appointment.insured_id.value,
            "schedule_id": schedule.schedule_id,
            "country_iso": appointment.country_iso.value,
            "center_id": schedule.center_id,
            "specialty_id": schedule.specialty_id,
            "medic_id": schedule.medic_id,
            "appointment_date": schedule.date,
            "status": appointment.status.value,
            "processed_at": appointment.processed_at,
            "created_at": appointment.created_at,
            "updated_at": appointment.updated_at,
        }

    def _to_entity(self, model: AppointmentRecordMixin) -> Appointment:
        """Convert model to entity."""
        country_iso = CountryISO.from_string(model.country_iso)
        return Appointment(
            id=AppointmentId.from_string(model.appointment_id),
            insured=Insured(country_iso=country_iso, insured_id=InsuredId(model.insured_id)),
            schedule=Schedule.restore(
                schedule_id=model.schedule_id,
                center_id=model.center_id,
                specialty_id=model.specialty_id,
                medic_id=model.medic_id,
                date=model.appointment_date,
            ),
            status=AppointmentStatus.from_string(model.status),
            processed_at=model.processed_at,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
