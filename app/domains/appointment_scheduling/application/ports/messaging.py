# ============================================================================
# SCOPE: APPLICATION LAYER (Appointment Scheduling)
# Description: Fan-out topic port.
# ============================================================================
"""Messaging Port.

Publishes appointment requests to the fan-out topic, which routes them to
the queue of the appointment's country.
"""

from typing import Any, Protocol, runtime_checkable

from app.domains.appointment_scheduling.domain.value_objects import CountryISO


@runtime_checkable
class IMessagingPort(Protocol):
    """Interface for the fan-out topic."""

    async def publish_appointment_created(self, data: dict[str, Any]) -> None:
        """Publish an appointment request, routed by ``data["countryISO"]``."""
        ...

    async def publish_message(self, payload: dict[str, Any], attributes: dict[str, str] | None = None) -> None:
        """
        Publish a raw message.

        Args:
            payload: Message body
            attributes: Routing attributes; ``countryISO`` selects the queue
        """
        ...

    async def publish_to_country_specific_topic(
        self,
        payload: dict[str, Any],
        country_iso: CountryISO,
        event_type: str,
    ) -> None:
        """Publish a message with the routing attributes for one country."""
        ...
