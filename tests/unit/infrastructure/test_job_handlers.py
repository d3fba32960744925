"""
Unit tests for the country and completion queue handlers.
"""

from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock

import pytest

from app.core.domain.exceptions import ValidationException
from app.domains.appointment_scheduling.application.dto import (
    CompleteAppointmentResult,
    ProcessCountryAppointmentResult,
)
from app.domains.appointment_scheduling.application.messages import InvalidMessageError
from app.domains.appointment_scheduling.domain.value_objects import CountryISO
from app.domains.appointment_scheduling.infrastructure.consumers import (
    CompletionHandler,
    CountryAppointmentHandler,
)
from app.domains.appointment_scheduling.infrastructure.messaging import QueueMessage

APPOINTMENT_ID = "3f2b8c1e-9d4a-4e6b-8f1a-2c3d4e5f6a7b"


@pytest.fixture
def body():
    return {
        "appointmentId": APPOINTMENT_ID,
        "insuredId": "00123",
        "countryISO": "PE",
        "scheduleId": 100,
        "status": "processed",
    }


@pytest.fixture
def container(mock_async_session):
    """Container stub handing out one mocked session per message."""
    container = MagicMock()

    @asynccontextmanager
    async def session():
        yield mock_async_session

    container.session = session
    return container


@pytest.mark.unit
@pytest.mark.asyncio
async def test_country_handler_runs_process_use_case(container, mock_async_session, body):
    # Arrange
    use_case = AsyncMock()
    use_case.execute.return_value = ProcessCountryAppointmentResult(
        appointment_id=APPOINTMENT_ID,
        country_iso="PE",
        status="processed",
        message="Appointment processed successfully for PE",
    )
    container.create_process_country_appointment_use_case.return_value = use_case
    handler = CountryAppointmentHandler(container, CountryISO.PE)

    # Act
    result = await handler(QueueMessage(job_id="job-1", body=body))

    # Assert
    assert result.message == "Appointment processed successfully for PE"
    container.create_process_country_appointment_use_case.assert_called_once_with(mock_async_session, CountryISO.PE)
    dto = use_case.execute.await_args.args[0]
    assert dto.appointment_id == APPOINTMENT_ID
    assert dto.schedule_id == 100


@pytest.mark.unit
@pytest.mark.asyncio
async def test_country_handler_rejects_other_country(container, body):
    body["countryISO"] = "CL"
    handler = CountryAppointmentHandler(container, CountryISO.PE)

    with pytest.raises(ValidationException):
        await handler(QueueMessage(job_id="job-1", body=body))

    container.create_process_country_appointment_use_case.assert_not_called()


@pytest.mark.unit
@pytest.mark.asyncio
async def test_country_handler_rejects_invalid_body(container, body):
    del body["insuredId"]
    handler = CountryAppointmentHandler(container, CountryISO.PE)

    with pytest.raises(InvalidMessageError):
        await handler(QueueMessage(job_id="job-1", body=body))


@pytest.mark.unit
@pytest.mark.asyncio
async def test_completion_handler_completes_processed_message(container, body):
    # Arrange
    use_case = AsyncMock()
    use_case.execute.return_value = CompleteAppointmentResult(
        appointment_id=APPOINTMENT_ID,
        country_iso="PE",
        status="completed",
        message="Appointment completed successfully",
    )
    container.create_complete_appointment_use_case.return_value = use_case
    handler = CompletionHandler(container)

    # Act
    result = await handler(QueueMessage(job_id="job-1", body=body))

    # Assert
    assert result.status == "completed"
    assert use_case.execute.await_args.args[0].appointment_id == APPOINTMENT_ID


@pytest.mark.unit
@pytest.mark.asyncio
async def test_completion_handler_skips_unprocessed_message(container, body):
    body["status"] = "pending"
    handler = CompletionHandler(container)

    assert await handler(QueueMessage(job_id="job-1", body=body)) is None
    container.create_complete_appointment_use_case.assert_not_called()
