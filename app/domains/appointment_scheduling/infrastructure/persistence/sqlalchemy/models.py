"""
Country store SQLAlchemy Models

Each country keeps its appointments and schedules in its own PostgreSQL
schema. Both countries share the column definitions below.
"""

from dataclasses import dataclass

from sqlalchemy import BigInteger, Boolean, Column, DateTime, Integer, String, false

from app.domains.appointment_scheduling.domain.value_objects import CountryISO
from app.models.db.base import Base, TimestampMixin
from app.models.db.schemas import CHILE_SCHEMA, PERU_SCHEMA


class AppointmentRecordMixin(TimestampMixin):
    """Columns of a confirmed appointment."""

    id = Column(BigInteger, primary_key=True, autoincrement=True)
    appointment_id = Column(String(36), nullable=False, unique=True)
    insured_id = Column(String(5), nullable=False, index=True)
    schedule_id = Column(BigInteger, nullable=False, index=True)
    country_iso = Column(String(2), nullable=False)

    # Schedule snapshot at booking time
    center_id = Column(Integer, nullable=False)
    specialty_id = Column(Integer, nullable=False)
    medic_id = Column(Integer, nullable=False)
    appointment_date = Column(DateTime(timezone=True), nullable=False)

    status = Column(String(20), nullable=False, index=True)
    processed_at = Column(DateTime(timezone=True), nullable=True)


class ScheduleRecordMixin(TimestampMixin):
    """Columns of a bookable schedule slot."""

    schedule_id = Column(BigInteger, primary_key=True, autoincrement=False)
    center_id = Column(Integer, nullable=False)
    specialty_id = Column(Integer, nullable=False)
    medic_id = Column(Integer, nullable=False)
    available_date = Column(DateTime(timezone=True), nullable=False, index=True)
    is_reserved = Column(Boolean, nullable=False, default=False, server_default=false(), index=True)


class PeruAppointmentModel(AppointmentRecordMixin, Base):
    __tablename__ = "appointments"
    __table_args__ = {"schema": PERU_SCHEMA}


class PeruScheduleModel(ScheduleRecordMixin, Base):
    __tablename__ = "schedules"
    __table_args__ = {"schema": PERU_SCHEMA}


class ChileAppointmentModel(AppointmentRecordMixin, Base):
    __tablename__ = "appointments"
    __table_args__ = {"schema": CHILE_SCHEMA}


class ChileScheduleModel(ScheduleRecordMixin, Base):
    __tablename__ = "schedules"
    __table_args__ = {"schema": CHILE_SCHEMA}


@dataclass(frozen=True)
class CountryModels:
    schema: str
    appointment: type[AppointmentRecordMixin]
    schedule: type[ScheduleRecordMixin]


COUNTRY_MODELS: dict[CountryISO, CountryModels] = {
    CountryISO.PE: CountryModels(PERU_SCHEMA, PeruAppointmentModel, PeruScheduleModel),
    CountryISO.CL: CountryModels(CHILE_SCHEMA, ChileAppointmentModel, ChileScheduleModel),
}

_missing = set(CountryISO) - set(COUNTRY_MODELS)
if _missing:
    raise RuntimeError(f"No country store models for: {sorted(c.value for c in _missing)}")


def models_for(country_iso: CountryISO) -> CountryModels:
    return COUNTRY_MODELS[country_iso]
