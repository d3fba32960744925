"""
Unit tests for the appointment saga over in-memory stores.

Covers redelivery of country and completion messages and the full
create -> process -> complete flow.
"""

from unittest.mock import AsyncMock

import pytest

from app.domains.appointment_scheduling.application.dto import (
    CreateAppointmentDto,
    GetAppointmentsByInsuredIdDto,
)
from app.domains.appointment_scheduling.application.messages import (
    parse_appointment_message,
    parse_completion_message,
)
from app.domains.appointment_scheduling.application.use_cases import (
    CompleteAppointmentUseCase,
    CreateAppointmentUseCase,
    GetAppointmentsByInsuredIdUseCase,
    ProcessCountryAppointmentUseCase,
)
from app.domains.appointment_scheduling.domain.exceptions import ScheduleAlreadyReservedError
from app.domains.appointment_scheduling.domain.value_objects import AppointmentStatus, CountryISO
from tests.utils.fakes import (
    InMemoryAppointmentRepository,
    InMemoryScheduleRepository,
    RecordingEventBus,
    RecordingUnitOfWork,
)


# ============================================================================
# FIXTURES
# ============================================================================


@pytest.fixture
def append_store():
    return InMemoryAppointmentRepository()


@pytest.fixture
def country_store():
    return InMemoryAppointmentRepository()


@pytest.fixture
def schedules(sample_schedule):
    return InMemoryScheduleRepository({CountryISO.PE: [sample_schedule]})


@pytest.fixture
def event_bus():
    return RecordingEventBus()


@pytest.fixture
def unit_of_work():
    return RecordingUnitOfWork()


@pytest.fixture
def process_use_case(country_store, schedules, event_bus, unit_of_work):
    return ProcessCountryAppointmentUseCase(country_store, schedules, event_bus, unit_of_work)


@pytest.fixture
def complete_use_case(append_store, event_bus):
    return CompleteAppointmentUseCase(append_store, event_bus)


# ============================================================================
# Redelivery
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_country_message_processed_twice(
    process_use_case,
    country_store,
    schedules,
    event_bus,
    unit_of_work,
    pending_appointment,
):
    """The second delivery leaves one row and one reservation behind."""
    # Arrange
    message = parse_appointment_message(
        {
            "appointmentId": pending_appointment.id.value,
            "insuredId": "00123",
            "countryISO": "PE",
            "scheduleId": 100,
        }
    )

    # Act
    first = await process_use_case.execute(message.to_process_dto())
    second = await process_use_case.execute(message.to_process_dto())

    # Assert
    assert first.already_processed is False
    assert second.already_processed is True
    assert len(country_store.rows) == 1
    assert country_store.save_calls == 1
    assert schedules.reserved == {(CountryISO.PE, 100)}
    assert unit_of_work.commits == 1
    assert len(event_bus.events) == 2
    assert event_bus.events[0].payload == event_bus.events[1].payload


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_second_appointment_for_reserved_schedule_rolls_back(
    process_use_case,
    country_store,
    event_bus,
    unit_of_work,
    pending_appointment,
    insured_pe,
    sample_schedule,
):
    # Arrange
    await process_use_case.execute(
        parse_appointment_message(
            {
                "appointmentId": pending_appointment.id.value,
                "insuredId": "00123",
                "countryISO": "PE",
                "scheduleId": 100,
            }
        ).to_process_dto()
    )
    other = type(pending_appointment).create(insured_pe, sample_schedule)

    # Act & Assert
    with pytest.raises(ScheduleAlreadyReservedError) as exc_info:
        await process_use_case.execute(
            parse_appointment_message(
                {
                    "appointmentId": other.id.value,
                    "insuredId": "00123",
                    "countryISO": "PE",
                    "scheduleId": 100,
                }
            ).to_process_dto()
        )

    assert exc_info.value.code == "APPOINTMENT_CONFLICT"
    assert unit_of_work.rollbacks == 1
    assert len(event_bus.events) == 1


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_completion_message_delivered_twice(complete_use_case, append_store, event_bus, pending_appointment):
    # Arrange
    await append_store.save(pending_appointment)
    body = {
        "appointmentId": pending_appointment.id.value,
        "insuredId": "00123",
        "countryISO": "PE",
        "scheduleId": 100,
        "status": "processed",
    }

    # Act
    first = await complete_use_case.execute(parse_completion_message(body))
    second = await complete_use_case.execute(parse_completion_message(body))

    # Assert
    assert first.message == "Appointment completed successfully"
    assert second.message == "Appointment already completed"
    assert append_store.rows[pending_appointment.id.value].status is AppointmentStatus.COMPLETED
    assert len(event_bus.events) == 1


# ============================================================================
# Full flow
# ============================================================================


@pytest.mark.unit
@pytest.mark.use_case
@pytest.mark.asyncio
async def test_create_process_complete(
    append_store,
    schedules,
    process_use_case,
    complete_use_case,
    event_bus,
):
    """A request ends up completed in the append store and reserved in the country store."""
    # Arrange
    messaging = AsyncMock()
    create = CreateAppointmentUseCase(append_store, schedules, messaging)
    get_appointments = GetAppointmentsByInsuredIdUseCase(append_store)

    # Act
    created = await create.execute(CreateAppointmentDto(country_iso="PE", insured_id="123", schedule_id=100))

    topic_payload = messaging.publish_to_country_specific_topic.await_args.args[0]
    await process_use_case.execute(parse_appointment_message(topic_payload).to_process_dto())

    completion_body = event_bus.events[-1].to_primitives()
    await complete_use_case.execute(parse_completion_message(completion_body))

    listed = await get_appointments.execute(GetAppointmentsByInsuredIdDto(insured_id="00123"))

    # Assert
    assert [a.appointment_id for a in listed.appointments] == [created.appointment_id]
    assert listed.appointments[0].status == "completed"
    assert listed.appointments[0].processed_at is not None
    assert (CountryISO.PE, 100) in schedules.reserved
