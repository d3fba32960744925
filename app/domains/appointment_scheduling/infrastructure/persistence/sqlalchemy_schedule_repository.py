"""
Schedule Repository Implementation

SQLAlchemy implementation of IScheduleRepository over the per-country
``schedules`` tables.
"""

import logging
from datetime import UTC, date, datetime, time, timedelta

from sqlalchemy import select, update
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.domain.entities import utc_now
from app.domains.appointment_scheduling.domain.entities import Schedule
from app.domains.appointment_scheduling.domain.exceptions import (
    ScheduleAlreadyReservedError,
    ScheduleNotFoundError,
)
from app.domains.appointment_scheduling.domain.value_objects import CountryISO

from .sqlalchemy.models import ScheduleRecordMixin, models_for

logger = logging.getLogger(__name__)


class SQLAlchemyScheduleRepository:
    """
    SQLAlchemy implementation of schedule repository.

    ``mark_as_reserved`` is a single conditional UPDATE, so two concurrent
    reservations of the same slot cannot both succeed.
    """

    def __init__(self, session: AsyncSession):
        """
        Initialize repository.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_schedule_id(self, schedule_id: int, country_iso: CountryISO) -> Schedule | None:
        model_cls = models_for(country_iso).schedule
        result = await self.session.execute(select(model_cls).where(model_cls.schedule_id == schedule_id))
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def find_available_schedules(
        self,
        country_iso: CountryISO,
        on_date: date | None = None,
    ) -> list[Schedule]:
        model_cls = models_for(country_iso).schedule
        query = select(model_cls).where(model_cls.is_reserved.is_(False))

        if on_date:
            day_start = datetime.combine(on_date, time.min, tzinfo=UTC)
            query = query.where(
                model_cls.available_date >= day_start,
                model_cls.available_date < day_start + timedelta(days=1),
            )

        result = await self.session.execute(query.order_by(model_cls.available_date))
        return [self._to_entity(m) for m in result.scalars().all()]

    async def save(self, schedule: Schedule, country_iso: CountryISO) -> None:
        model_cls = models_for(country_iso).schedule
        values = {
            "center_id": schedule.center_id,
            "specialty_id": schedule.specialty_id,
            "medic_id": schedule.medic_id,
            "available_date": schedule.date,
            "updated_at": utc_now(),
        }
        stmt = (
            pg_insert(model_cls)
            .values(schedule_id=schedule.schedule_id, created_at=utc_now(), **values)
            .on_conflict_do_update(index_elements=["schedule_id"], set_=values)
        )
        await self.session.execute(stmt)

    async def mark_as_reserved(self, schedule_id: int, country_iso: CountryISO) -> None:
        model_cls = models_for(country_iso).schedule
        stmt = (
            update(model_cls)
            .where(model_cls.schedule_id == schedule_id, model_cls.is_reserved.is_(False))
            .values(is_reserved=True, updated_at=utc_now())
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 1:
            logger.info(f"Schedule {schedule_id} reserved in {country_iso}")
            return

        exists = await self.session.scalar(select(model_cls.schedule_id).where(model_cls.schedule_id == schedule_id))
        if exists is None:
            raise ScheduleNotFoundError(schedule_id, country_iso.value)
        raise ScheduleAlreadyReservedError(schedule_id, country_iso.value)

    def _to_entity(self, model: ScheduleRecordMixin) -> Schedule:
        """Convert model to entity."""
        return Schedule.restore(
            schedule_id=model.schedule_id,
            center_id=model.center_id,
            specialty_id=model.specialty_id,
            medic_id=model.medic_id,
            date=model.available_date,
        )
