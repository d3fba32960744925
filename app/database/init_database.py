"""
Script para cargar horarios de ejemplo en la base de datos de citas.

Los esquemas y tablas por país los crean las migraciones de Alembic, que
deben aplicarse antes:

    alembic upgrade head
    python -m app.database.init_database --days 14
"""

import argparse
import asyncio
import logging
from datetime import UTC, datetime, time, timedelta

from sqlalchemy.ext.asyncio import AsyncEngine

from app.config.settings import Settings, get_settings
from app.core.domain.exceptions import BusinessRuleViolationException
from app.core.shared.logger import configure_logging
from app.database.async_db import create_async_database_engine, create_session_factory, session_scope
from app.domains.appointment_scheduling.domain.entities import Schedule
from app.domains.appointment_scheduling.domain.services.country_rules import COUNTRY_RULES
from app.domains.appointment_scheduling.domain.value_objects import CountryISO
from app.domains.appointment_scheduling.infrastructure.persistence import SQLAlchemyScheduleRepository

logger = logging.getLogger(__name__)

# First schedule id per country
SEED_ID_BASE = {CountryISO.PE: 100, CountryISO.CL: 500}
# (center_id, specialty_id, medic_id)
SEED_MEDICS = {
    CountryISO.PE: [(1, 1, 1), (1, 2, 2), (2, 3, 3), (2, 4, 4)],
    CountryISO.CL: [(3, 1, 5), (3, 2, 6), (4, 5, 7), (4, 6, 8)],
}
SEED_HOURS = (9, 10, 11, 14, 15, 16)


def build_seed_schedules(country_iso: CountryISO, days: int, start: datetime | None = None) -> list[Schedule]:
    """Horarios de ejemplo para los próximos ``days`` días que cumplen la regla del país."""
    start_day = (start or datetime.now(UTC)).date() + timedelta(days=1)
    rule = COUNTRY_RULES[country_iso]
    schedules: list[Schedule] = []
    next_id = SEED_ID_BASE[country_iso]

    for offset in range(days):
        day = start_day + timedelta(days=offset)
        for hour in SEED_HOURS:
            for center_id, specialty_id, medic_id in SEED_MEDICS[country_iso]:
                schedule = Schedule.restore(
                    schedule_id=next_id,
                    center_id=center_id,
                    specialty_id=specialty_id,
                    medic_id=medic_id,
                    date=datetime.combine(day, time(hour), tzinfo=UTC),
                )
                next_id += 1
                try:
                    rule(schedule)
                except BusinessRuleViolationException:
                    continue
                schedules.append(schedule)
    return schedules


async def seed_schedules(engine: AsyncEngine, days: int) -> int:
    """Carga horarios de ejemplo. Volver a ejecutarlo actualiza los mismos ids."""
    session_factory = create_session_factory(engine)
    total = 0
    async with session_scope(session_factory) as session:
        repository = SQLAlchemyScheduleRepository(session)
        for country_iso in CountryISO:
            schedules = build_seed_schedules(country_iso, days)
            for schedule in schedules:
                await repository.save(schedule, country_iso)
            logger.info(f"Seeded {len(schedules)} schedules for {country_iso}")
            total += len(schedules)
        await session.commit()
    return total


async def init_database(settings: Settings, days: int = 14) -> int:
    engine = create_async_database_engine(settings)
    try:
        return await seed_schedules(engine, days)
    finally:
        await engine.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Carga horarios de ejemplo en la base de datos de citas médicas")
    parser.add_argument("--days", type=int, default=14, help="Días de horarios a generar (default: 14)")
    args = parser.parse_args()

    settings = get_settings()
    configure_logging(level=settings.LOG_LEVEL, service_name=f"{settings.SERVICE_NAME}-init")
    asyncio.run(init_database(settings, days=args.days))


if __name__ == "__main__":
    main()
