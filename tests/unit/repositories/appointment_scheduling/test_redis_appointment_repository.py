"""
Unit tests for RedisAppointmentRepository.
"""

import json

import pytest

from app.core.domain.exceptions import DuplicateEntityException
from app.domains.appointment_scheduling.domain.exceptions import AppointmentNotFoundError
from app.domains.appointment_scheduling.domain.value_objects import AppointmentStatus
from app.domains.appointment_scheduling.infrastructure.persistence import RedisAppointmentRepository


@pytest.fixture
def repository(mock_redis):
    return RedisAppointmentRepository(mock_redis, key_prefix="appointment")


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_save_writes_document_and_index(repository, mock_redis, pending_appointment):
    # Act
    await repository.save(pending_appointment)

    # Assert
    key = f"appointment:{pending_appointment.id.value}"
    args, kwargs = mock_redis.set.await_args
    assert args[0] == key
    assert kwargs == {"nx": True}
    assert json.loads(args[1])["status"] == "pending"

    index_key, mapping = mock_redis.zadd.await_args.args
    assert index_key == "appointment:insured:00123"
    assert mapping == {pending_appointment.id.value: pending_appointment.created_at.timestamp()}


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_save_existing_id_raises_duplicate(repository, mock_redis, pending_appointment):
    """A rejected duplicate leaves the insured index untouched."""
    # Arrange
    mock_redis.set.return_value = None

    # Act & Assert
    with pytest.raises(DuplicateEntityException):
        await repository.save(pending_appointment)

    mock_redis.zadd.assert_not_awaited()


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_find_by_appointment_id(repository, mock_redis, processed_appointment):
    # Arrange
    mock_redis.get.return_value = json.dumps(processed_appointment.to_primitives())

    # Act
    found = await repository.find_by_appointment_id(processed_appointment.id.value)

    # Assert
    mock_redis.get.assert_awaited_once_with(f"appointment:{processed_appointment.id.value}")
    assert found.id == processed_appointment.id
    assert found.status is AppointmentStatus.PROCESSED
    assert found.processed_at == processed_appointment.processed_at


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_find_by_appointment_id_missing(repository):
    assert await repository.find_by_appointment_id("3f2b8c1e-9d4a-4e6b-8f1a-2c3d4e5f6a7b") is None


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_find_by_insured_id_skips_dangling_index_entries(repository, mock_redis, pending_appointment):
    # Arrange
    mock_redis.zrange.return_value = [pending_appointment.id.value, "gone"]
    mock_redis.mget.return_value = [json.dumps(pending_appointment.to_primitives()), None]

    # Act
    found = await repository.find_by_insured_id("00123")

    # Assert
    mock_redis.zrange.assert_awaited_once_with("appointment:insured:00123", 0, -1)
    assert [a.id for a in found] == [pending_appointment.id]


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_find_by_insured_id_empty(repository, mock_redis):
    assert await repository.find_by_insured_id("00123") == []
    mock_redis.mget.assert_not_awaited()


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_update_only_replaces_existing(repository, mock_redis, processed_appointment):
    # Act
    await repository.update(processed_appointment)

    # Assert
    assert mock_redis.set.await_args.kwargs == {"xx": True}


@pytest.mark.unit
@pytest.mark.repository
@pytest.mark.asyncio
async def test_update_missing_raises_not_found(repository, mock_redis, processed_appointment):
    # Arrange
    mock_redis.set.return_value = None

    # Act & Assert
    with pytest.raises(AppointmentNotFoundError):
        await repository.update(processed_appointment)
