"""arq adapters: fan-out topic and completion event bus."""

from .arq_event_bus import ArqEventBus, Route, default_routes
from .arq_topic_publisher import ArqTopicPublisher
from .codec import (
    COMPLETE_APPOINTMENT_JOB,
    PROCESS_COUNTRY_APPOINTMENT_JOB,
    QueueMessage,
    encode_message,
)

__all__ = [
    "COMPLETE_APPOINTMENT_JOB",
    "PROCESS_COUNTRY_APPOINTMENT_JOB",
    "ArqEventBus",
    "ArqTopicPublisher",
    "QueueMessage",
    "Route",
    "default_routes",
    "encode_message",
]
