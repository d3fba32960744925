"""
Appointment Scheduling API Dependencies

FastAPI dependencies for the appointment scheduling domain. The container is
built by the application lifespan and stored on ``app.state``.
"""

from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.container import AppointmentContainer
from app.domains.appointment_scheduling.application.use_cases import (
    CreateAppointmentUseCase,
    GetAppointmentsByInsuredIdUseCase,
)


def get_appointment_container(request: Request) -> AppointmentContainer:
    """Get the AppointmentContainer created at startup."""
    return request.app.state.appointment_container


ContainerDep = Annotated[AppointmentContainer, Depends(get_appointment_container)]


async def get_db_session(container: ContainerDep) -> AsyncIterator[AsyncSession]:
    """One database session per request."""
    async with container.session() as session:
        yield session


# Type alias for database session dependency
DbSession = Annotated[AsyncSession, Depends(get_db_session)]


def get_create_appointment_use_case(container: ContainerDep, db: DbSession) -> CreateAppointmentUseCase:
    """Get CreateAppointmentUseCase instance with database session."""
    return container.create_create_appointment_use_case(db)


def get_appointments_use_case(container: ContainerDep) -> GetAppointmentsByInsuredIdUseCase:
    """Get GetAppointmentsByInsuredIdUseCase instance."""
    return container.create_get_appointments_use_case()


__all__ = [
    "get_appointment_container",
    "get_appointments_use_case",
    "get_create_appointment_use_case",
    "get_db_session",
]
