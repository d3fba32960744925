"""
Completion event bus.

Every event is appended to the bus stream for audit. Routing rules then
enqueue it as an arq job on each queue subscribed to its event name.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, NamedTuple

from app.core.domain.events import DomainEvent
from app.domains.appointment_scheduling.domain.events import AppointmentProcessed

from .codec import COMPLETE_APPOINTMENT_JOB, encode_message

if TYPE_CHECKING:
    from arq.connections import ArqRedis

    from app.config.settings import Settings

logger = logging.getLogger(__name__)


class Route(NamedTuple):
    queue: str
    job_name: str


def default_routes(settings: Settings) -> dict[str, list[Route]]:
    """Processed appointments are forwarded to the completion queue."""
    return {AppointmentProcessed.EVENT_NAME: [Route(settings.COMPLETION_QUEUE, COMPLETE_APPOINTMENT_JOB)]}


class ArqEventBus:
    """IEventBus over an audit stream and arq queues."""

    def __init__(
        self,
        pool: ArqRedis,
        bus_stream: str,
        routes: Mapping[str, Sequence[Route]] | None = None,
        max_length: int | None = None,
    ):
        """
        Args:
            pool: arq connection pool, also used for the audit stream
            bus_stream: Stream receiving every published event
            routes: Event name to target queues and the job each one runs
            max_length: Approximate cap applied to the bus stream
        """
        self._pool = pool
        self._bus_stream = bus_stream
        self._routes = routes or {}
        self._max_length = max_length

    async def publish(self, event: DomainEvent[Any]) -> None:
        body = event.to_primitives()
        attributes = {"eventName": event.event_name, "eventId": event.event_id}

        await self._pool.xadd(
            self._bus_stream,
            encode_message(body, attributes),
            maxlen=self._max_length,
            approximate=True,
        )

        queues = []
        for route in self._routes.get(event.event_name, ()):
            await self._pool.enqueue_job(route.job_name, body, attributes, _queue_name=route.queue)
            queues.append(route.queue)

        logger.info(
            f"Published {event.event_name} ({event.event_id}) to {self._bus_stream}"
            + (f", enqueued on {', '.join(queues)}" if queues else "")
        )
