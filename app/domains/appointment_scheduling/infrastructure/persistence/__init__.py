"""Store adapters: Redis append store and SQLAlchemy country stores."""

from .redis_appointment_repository import RedisAppointmentRepository
from .sqlalchemy_appointment_repository import SQLAlchemyCountryAppointmentRepository
from .sqlalchemy_schedule_repository import SQLAlchemyScheduleRepository
from .unit_of_work import SQLAlchemyUnitOfWork

__all__ = [
    "RedisAppointmentRepository",
    "SQLAlchemyCountryAppointmentRepository",
    "SQLAlchemyScheduleRepository",
    "SQLAlchemyUnitOfWork",
]
