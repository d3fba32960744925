# ============================================================================
# SCOPE: APPLICATION LAYER (Appointment Scheduling)
# Description: Domain event bus port.
# ============================================================================
"""Event Bus Port."""

from typing import Any, Protocol, runtime_checkable

from app.core.domain.events import DomainEvent


@runtime_checkable
class IEventBus(Protocol):
    """Publishes domain events to the completion bus."""

    async def publish(self, event: DomainEvent[Any]) -> None:
        """
        Publish one domain event.

        Raises:
            Infrastructure errors unchanged; the caller decides on retries.
        """
        ...
