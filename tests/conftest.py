"""
Shared pytest fixtures for all tests.

This module provides common fixtures for mock sessions, mock Redis clients,
and sample domain objects.
"""

import os
from datetime import datetime
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

# Ensure test environment
os.environ["ENVIRONMENT"] = "test"

from app.domains.appointment_scheduling.domain.entities import Appointment, Insured, Schedule  # noqa: E402
from app.domains.appointment_scheduling.domain.value_objects import CountryISO, InsuredId  # noqa: E402
from tests.utils.dates import next_weekday_at  # noqa: E402


# ============================================================================
# DATABASE FIXTURES
# ============================================================================


@pytest.fixture
def mock_async_session():
    """Create a mock async database session."""
    session = AsyncMock(spec=AsyncSession)
    session.execute = AsyncMock()
    session.scalar = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    return session


# ============================================================================
# REDIS FIXTURES
# ============================================================================


@pytest.fixture
def mock_redis():
    """Create a mock async Redis client."""
    mock = MagicMock()
    mock.get = AsyncMock(return_value=None)
    mock.set = AsyncMock(return_value=True)
    mock.mget = AsyncMock(return_value=[])
    mock.zrange = AsyncMock(return_value=[])
    mock.zadd = AsyncMock(return_value=1)
    return mock


@pytest.fixture
def mock_queue_pool():
    """Create a mock arq pool (an ArqRedis client)."""
    pool = MagicMock()
    job = MagicMock()
    job.job_id = "job-1"
    pool.enqueue_job = AsyncMock(return_value=job)
    pool.xadd = AsyncMock(return_value="1700000000000-0")
    return pool


# ============================================================================
# TEST DATA FIXTURES
# ============================================================================


@pytest.fixture
def future_date() -> datetime:
    """A Monday at 10:00 UTC: valid for every country rule."""
    return next_weekday_at(0, 10)


@pytest.fixture
def sample_schedule(future_date) -> Schedule:
    """Schedule 100 in the future."""
    return Schedule.restore(
        schedule_id=100,
        center_id=4,
        specialty_id=3,
        medic_id=2,
        date=future_date,
    )


@pytest.fixture
def insured_pe() -> Insured:
    return Insured(country_iso=CountryISO.PE, insured_id=InsuredId("00123"))


@pytest.fixture
def insured_cl() -> Insured:
    return Insured(country_iso=CountryISO.CL, insured_id=InsuredId("54321"))


@pytest.fixture
def pending_appointment(insured_pe, sample_schedule) -> Appointment:
    """A pending PE appointment."""
    return Appointment.create(insured_pe, sample_schedule)


@pytest.fixture
def processed_appointment(insured_pe, sample_schedule) -> Appointment:
    """A processed PE appointment."""
    appointment = Appointment.create(insured_pe, sample_schedule)
    appointment.mark_as_processed()
    return appointment
