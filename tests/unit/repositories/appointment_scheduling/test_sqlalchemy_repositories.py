"""
Unit tests for the country store SQLAlchemy repositories.

Statements are compiled with the PostgreSQL dialect instead of running
against a database.
"""

from unittest.mock import MagicMock

import pytest
from sqlalchemy.dialects import postgresql

from app.core.domain.exceptions import ValidationException
from app.domains.appointment_scheduling.domain.entities import Appointment
from app.domains.appointment_scheduling.domain.exceptions import (
    AppointmentNotFoundError,
    ScheduleAlreadyReservedError,
    ScheduleNotFoundError,
)
from app.domains.appointment_scheduling.domain.value_objects import AppointmentStatus, CountryISO
from app.domains.appointment_scheduling.infrastructure.persistence import (
    SQLAlchemyCountryAppointmentRepository,
    SQLAlchemyScheduleRepository,
    SQLAlchemyUnitOfWork,
)
from app.domains.appointment_scheduling.infrastructure.persistence.sqlalchemy.models import models_for


def _sql(session) -> str:
    statement = session.execute.await_args.args[0]
    return str(statement.compile(dialect=postgresql.dialect()))


def _result(rowcount: int = 1, scalar=None, scalars=()):
    result = MagicMock()
    result.rowcount = rowcount
    result.scalar_one_or_none.return_value = scalar
    result.scalars.return_value.all.return_value = list(scalars)
    return result


def _record(model_cls, appointment: Appointment):
    schedule = appointment.schedule
    return model_cls(
        appointment_id=appointment.id.value,
        insured_id=appointment.insured_id.value,
        schedule_id=schedule.schedule_id,
        country_iso=appointment.country_iso.value,
        center_id=schedule.center_id,
        specialty_id=schedule.specialty_id,
        medic_id=schedule.medic_id,
        appointment_date=schedule.date,
        status=appointment.status.value,
        processed_at=appointment.processed_at,
        created_at=appointment.created_at,
        updated_at=appointment.updated_at,
    )


# ============================================================================
# Models
# ============================================================================


@pytest.mark.unit
class TestCountryModels:
    def test_each_country_has_its_own_schema(self):
        pe = models_for(CountryISO.PE)
        cl = models_for(CountryISO.CL)

        assert pe.schema == "appointments_pe"
        assert cl.schema == "appointments_cl"
        assert pe.appointment.__table__.schema == "appointments_pe"
        assert cl.schedule.__table__.schema == "appointments_cl"
        assert pe.appointment.__table__ is not cl.appointment.__table__


# ============================================================================
# SQLAlchemyCountryAppointmentRepository
# ============================================================================


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_save_is_insert_on_conflict_do_nothing(mock_async_session, processed_appointment):
    # Arrange
    mock_async_session.execute.return_value = _result(rowcount=1)
    repository = SQLAlchemyCountryAppointmentRepository(mock_async_session, CountryISO.PE)

    # Act
    await repository.save(processed_appointment)

    # Assert
    sql = _sql(mock_async_session)
    assert "INSERT INTO appointments_pe.appointments" in sql
    assert "ON CONFLICT (appointment_id) DO NOTHING" in sql


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_save_duplicate_is_silent(mock_async_session, processed_appointment):
    # Arrange
    mock_async_session.execute.return_value = _result(rowcount=0)
    repository = SQLAlchemyCountryAppointmentRepository(mock_async_session, CountryISO.PE)

    # Act
    await repository.save(processed_appointment)

    # Assert
    mock_async_session.execute.assert_awaited_once()


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_save_rejects_other_country(mock_async_session, processed_appointment):
    repository = SQLAlchemyCountryAppointmentRepository(mock_async_session, CountryISO.CL)

    with pytest.raises(ValidationException):
        await repository.save(processed_appointment)

    mock_async_session.execute.assert_not_awaited()


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_find_by_appointment_id_maps_row(mock_async_session, processed_appointment):
    # Arrange
    record = _record(models_for(CountryISO.PE).appointment, processed_appointment)
    mock_async_session.execute.return_value = _result(scalar=record)
    repository = SQLAlchemyCountryAppointmentRepository(mock_async_session, CountryISO.PE)

    # Act
    found = await repository.find_by_appointment_id(processed_appointment.id.value)

    # Assert
    assert "FROM appointments_pe.appointments" in _sql(mock_async_session)
    assert found.id == processed_appointment.id
    assert found.status is AppointmentStatus.PROCESSED
    assert found.schedule.schedule_id == 100
    assert found.insured_id.value == "00123"


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_find_by_insured_id(mock_async_session, processed_appointment):
    # Arrange
    record = _record(models_for(CountryISO.PE).appointment, processed_appointment)
    mock_async_session.execute.return_value = _result(scalars=[record])
    repository = SQLAlchemyCountryAppointmentRepository(mock_async_session, CountryISO.PE)

    # Act
    found = await repository.find_by_insured_id("00123")

    # Assert
    assert len(found) == 1
    assert "ORDER BY appointments_pe.appointments.created_at" in _sql(mock_async_session)


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_update_missing_row_raises(mock_async_session, processed_appointment):
    # Arrange
    mock_async_session.execute.return_value = _result(rowcount=0)
    repository = SQLAlchemyCountryAppointmentRepository(mock_async_session, CountryISO.PE)

    # Act & Assert
    with pytest.raises(AppointmentNotFoundError):
        await repository.update(processed_appointment)


# ============================================================================
# SQLAlchemyScheduleRepository
# ============================================================================


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_find_schedule_uses_country_schema(mock_async_session):
    # Arrange
    mock_async_session.execute.return_value = _result(scalar=None)
    repository = SQLAlchemyScheduleRepository(mock_async_session)

    # Act
    found = await repository.find_by_schedule_id(100, CountryISO.CL)

    # Assert
    assert found is None
    assert "FROM appointments_cl.schedules" in _sql(mock_async_session)


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_find_available_schedules_filters_reserved(mock_async_session, sample_schedule):
    # Arrange
    model_cls = models_for(CountryISO.PE).schedule
    record = model_cls(
        schedule_id=sample_schedule.schedule_id,
        center_id=sample_schedule.center_id,
        specialty_id=sample_schedule.specialty_id,
        medic_id=sample_schedule.medic_id,
        available_date=sample_schedule.date,
        is_reserved=False,
    )
    mock_async_session.execute.return_value = _result(scalars=[record])
    repository = SQLAlchemyScheduleRepository(mock_async_session)

    # Act
    found = await repository.find_available_schedules(CountryISO.PE, on_date=sample_schedule.date.date())

    # Assert
    assert [s.schedule_id for s in found] == [100]
    sql = _sql(mock_async_session)
    assert "is_reserved IS false" in sql
    assert "available_date >=" in sql


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_save_schedule_is_upsert(mock_async_session, sample_schedule):
    repository = SQLAlchemyScheduleRepository(mock_async_session)

    await repository.save(sample_schedule, CountryISO.PE)

    sql = _sql(mock_async_session)
    assert "INSERT INTO appointments_pe.schedules" in sql
    assert "ON CONFLICT (schedule_id) DO UPDATE" in sql


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_mark_as_reserved_success(mock_async_session):
    # Arrange
    mock_async_session.execute.return_value = _result(rowcount=1)
    repository = SQLAlchemyScheduleRepository(mock_async_session)

    # Act
    await repository.mark_as_reserved(100, CountryISO.PE)

    # Assert
    sql = _sql(mock_async_session)
    assert "UPDATE appointments_pe.schedules" in sql
    assert "is_reserved IS false" in sql
    mock_async_session.scalar.assert_not_awaited()


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("existing", "error"),
    [(None, ScheduleNotFoundError), (100, ScheduleAlreadyReservedError)],
)
async def test_mark_as_reserved_failures(mock_async_session, existing, error):
    # Arrange
    mock_async_session.execute.return_value = _result(rowcount=0)
    mock_async_session.scalar.return_value = existing
    repository = SQLAlchemyScheduleRepository(mock_async_session)

    # Act & Assert
    with pytest.raises(error):
        await repository.mark_as_reserved(100, CountryISO.PE)


# ============================================================================
# SQLAlchemyUnitOfWork
# ============================================================================


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_unit_of_work_commits_on_success(mock_async_session):
    async with SQLAlchemyUnitOfWork(mock_async_session):
        pass

    mock_async_session.commit.assert_awaited_once()
    mock_async_session.rollback.assert_not_awaited()


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_unit_of_work_rolls_back_and_propagates(mock_async_session):
    with pytest.raises(ScheduleAlreadyReservedError):
        async with SQLAlchemyUnitOfWork(mock_async_session):
            raise ScheduleAlreadyReservedError(100, "PE")

    mock_async_session.rollback.assert_awaited_once()
    mock_async_session.commit.assert_not_awaited()
