"""
Redis Appointment Repository

Append store for appointment requests. Each appointment is one JSON document
under ``{prefix}:{appointment_id}``; a sorted set per insured patient,
scored by creation time, indexes them.

Key Design:
- ``save`` uses SET NX, so an id is only ever written once
- ``update`` uses SET XX, so only existing records are replaced
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from app.core.domain.exceptions import DuplicateEntityException
from app.domains.appointment_scheduling.domain.entities import Appointment
from app.domains.appointment_scheduling.domain.exceptions import AppointmentNotFoundError

if TYPE_CHECKING:
    from redis.asyncio import Redis

logger = logging.getLogger(__name__)

DEFAULT_KEY_PREFIX = "appointment"


class RedisAppointmentRepository:
    """IAppointmentRepository over Redis."""

    def __init__(self, redis_client: Redis, key_prefix: str = DEFAULT_KEY_PREFIX):
        """
        Initialize repository.

        Args:
            redis_client: Async Redis client (``decode_responses=True``)
            key_prefix: Namespace for every key written by this repository
        """
        self._redis = redis_client
        self._prefix = key_prefix

    def _get_key(self, appointment_id: str) -> str:
        return f"{self._prefix}:{appointment_id}"

    def _get_index_key(self, insured_id: str) -> str:
        return f"{self._prefix}:insured:{insured_id}"

    async def find_by_appointment_id(self, appointment_id: str) -> Appointment | None:
        data = await self._redis.get(self._get_key(appointment_id))
        if data is None:
            return None
        return Appointment.from_primitives(json.loads(data))

    async def find_by_insured_id(self, insured_id: str) -> list[Appointment]:
        appointment_ids = await self._redis.zrange(self._get_index_key(insured_id), 0, -1)
        if not appointment_ids:
            return []

        documents = await self._redis.mget([self._get_key(a) for a in appointment_ids])
        # Index entries can outlive documents deleted by hand
        return [Appointment.from_primitives(json.loads(doc)) for doc in documents if doc is not None]

    async def save(self, appointment: Appointment) -> None:
        """
        Store a new appointment.

        Raises:
            DuplicateEntityException: If the id is already stored
        """
        key = self._get_key(appointment.id.value)
        created = await self._redis.set(key, json.dumps(appointment.to_primitives()), nx=True)
        if not created:
            raise DuplicateEntityException("Appointment", "appointmentId", appointment.id.value)

        # Only the writer that created the document owns its index entry
        await self._redis.zadd(
            self._get_index_key(appointment.insured_id.value),
            {appointment.id.value: appointment.created_at.timestamp()},
        )

        logger.debug(f"Appointment {appointment.id} stored in append store")

    async def update(self, appointment: Appointment) -> None:
        updated = await self._redis.set(
            self._get_key(appointment.id.value),
            json.dumps(appointment.to_primitives()),
            xx=True,
        )
        if not updated:
            raise AppointmentNotFoundError(appointment.id.value)

        logger.debug(f"Appointment {appointment.id} updated to {appointment.status}")
