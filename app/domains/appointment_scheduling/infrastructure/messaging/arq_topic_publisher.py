"""
Fan-out topic on arq queues.

A message carrying a ``countryISO`` attribute is enqueued on ``{topic}.{CC}``,
the queue the worker of that country drains. Messages without it land on
the base topic queue.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from app.domains.appointment_scheduling.domain.value_objects import CountryISO

from .codec import PROCESS_COUNTRY_APPOINTMENT_JOB

if TYPE_CHECKING:
    from arq.connections import ArqRedis

logger = logging.getLogger(__name__)

COUNTRY_ATTRIBUTE = "countryISO"
EVENT_TYPE_ATTRIBUTE = "eventType"


class ArqTopicPublisher:
    """IMessagingPort over arq queues."""

    def __init__(
        self,
        pool: ArqRedis,
        topic_queue: str,
        job_name: str = PROCESS_COUNTRY_APPOINTMENT_JOB,
    ):
        """
        Args:
            pool: arq connection pool
            topic_queue: Base queue name; country queues are suffixed with ``.CC``
            job_name: Job run by the country workers for each message
        """
        self._pool = pool
        self._topic = topic_queue
        self._job_name = job_name

    def queue_for(self, attributes: dict[str, str] | None) -> str:
        country = (attributes or {}).get(COUNTRY_ATTRIBUTE)
        return f"{self._topic}.{country.upper()}" if country else self._topic

    async def publish_message(self, payload: dict[str, Any], attributes: dict[str, str] | None = None) -> None:
        queue = self.queue_for(attributes)
        job = await self._pool.enqueue_job(self._job_name, payload, attributes or {}, _queue_name=queue)
        logger.info(f"Enqueued {self._job_name} job {job.job_id if job else '(duplicate)'} on {queue}")

    async def publish_to_country_specific_topic(
        self,
        payload: dict[str, Any],
        country_iso: CountryISO,
        event_type: str,
    ) -> None:
        await self.publish_message(
            payload,
            {COUNTRY_ATTRIBUTE: country_iso.value, EVENT_TYPE_ATTRIBUTE: event_type},
        )

    async def publish_appointment_created(self, data: dict[str, Any]) -> None:
        country_iso = CountryISO.from_string(data.get(COUNTRY_ATTRIBUTE, ""))
        await self.publish_to_country_specific_topic(data, country_iso, "AppointmentCreated")
