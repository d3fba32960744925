# ============================================================================
# SCOPE: DOMAIN
# Description: Container for Appointment Scheduling domain dependencies.
#              Provides factories for repositories, messaging and use cases.
# ============================================================================
"""
Appointment Scheduling Domain Container.

Every factory returns a fresh adapter. Callers build what they need for one
request or one queue message and drop it afterwards.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from app.database.async_db import session_scope
from app.domains.appointment_scheduling.application.use_cases import (
    CompleteAppointmentUseCase,
    CreateAppointmentUseCase,
    GetAppointmentsByInsuredIdUseCase,
    ProcessCountryAppointmentUseCase,
)
from app.domains.appointment_scheduling.domain.services import AppointmentDomainService
from app.domains.appointment_scheduling.domain.value_objects import CountryISO
from app.domains.appointment_scheduling.infrastructure.messaging import (
    ArqEventBus,
    ArqTopicPublisher,
    default_routes,
)
from app.domains.appointment_scheduling.infrastructure.persistence import (
    RedisAppointmentRepository,
    SQLAlchemyCountryAppointmentRepository,
    SQLAlchemyScheduleRepository,
    SQLAlchemyUnitOfWork,
)

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from app.core.container.base import BaseContainer

logger = logging.getLogger(__name__)


class AppointmentContainer:
    """
    Appointment scheduling container.

    Single Responsibility: Wire repositories, messaging and use cases.
    """

    def __init__(self, base: BaseContainer):
        """
        Initialize container.

        Args:
            base: BaseContainer with the shared connection pools
        """
        self._base = base
        self.settings = base.settings

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Database session for one request or one message."""
        async with session_scope(self._base.session_factory) as session:
            yield session

    # ==================== REPOSITORIES ====================

    def create_append_store(self) -> RedisAppointmentRepository:
        return RedisAppointmentRepository(self._base.redis, key_prefix=self.settings.REDIS_KEY_PREFIX)

    def create_country_appointment_repository(
        self,
        session: AsyncSession,
        country_iso: CountryISO,
    ) -> SQLAlchemyCountryAppointmentRepository:
        return SQLAlchemyCountryAppointmentRepository(session=session, country_iso=country_iso)

    def create_schedule_repository(self, session: AsyncSession) -> SQLAlchemyScheduleRepository:
        return SQLAlchemyScheduleRepository(session=session)

    def create_unit_of_work(self, session: AsyncSession) -> SQLAlchemyUnitOfWork:
        return SQLAlchemyUnitOfWork(session=session)

    # ==================== MESSAGING ====================

    def create_messaging(self) -> ArqTopicPublisher:
        return ArqTopicPublisher(self._base.queue_pool, topic_queue=self.settings.APPOINTMENT_TOPIC_QUEUE)

    def create_event_bus(self) -> ArqEventBus:
        return ArqEventBus(
            self._base.queue_pool,
            bus_stream=self.settings.EVENT_BUS_STREAM,
            routes=default_routes(self.settings),
            max_length=self.settings.STREAM_MAX_LENGTH,
        )

    # ==================== USE CASES ====================

    def create_create_appointment_use_case(self, session: AsyncSession) -> CreateAppointmentUseCase:
        """Create CreateAppointmentUseCase with dependencies."""
        return CreateAppointmentUseCase(
            appointment_repository=self.create_append_store(),
            schedule_repository=self.create_schedule_repository(session),
            messaging=self.create_messaging(),
            domain_service=AppointmentDomainService(),
        )

    def create_get_appointments_use_case(self) -> GetAppointmentsByInsuredIdUseCase:
        """Create GetAppointmentsByInsuredIdUseCase with dependencies."""
        return GetAppointmentsByInsuredIdUseCase(appointment_repository=self.create_append_store())

    def create_process_country_appointment_use_case(
        self,
        session: AsyncSession,
        country_iso: CountryISO,
    ) -> ProcessCountryAppointmentUseCase:
        """Create ProcessCountryAppointmentUseCase; both repositories share the session."""
        return ProcessCountryAppointmentUseCase(
            appointment_repository=self.create_country_appointment_repository(session, country_iso),
            schedule_repository=self.create_schedule_repository(session),
            event_bus=self.create_event_bus(),
            unit_of_work=self.create_unit_of_work(session),
            domain_service=AppointmentDomainService(),
        )

    def create_complete_appointment_use_case(self) -> CompleteAppointmentUseCase:
        """Create CompleteAppointmentUseCase with dependencies."""
        return CompleteAppointmentUseCase(
            appointment_repository=self.create_append_store(),
            event_bus=self.create_event_bus(),
            domain_service=AppointmentDomainService(),
        )
