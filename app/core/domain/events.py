"""
Base Domain Event Classes for Domain-Driven Design

Domain Events represent significant business occurrences that domain experts
care about. They are used to communicate between aggregates and bounded contexts.

Every event travels in the same envelope (name, id, timestamp, payload); only the
payload varies. Payload variants are frozen dataclasses that register themselves
by ``EVENT_NAME`` so an envelope can be rebuilt from its wire form.
"""

from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any, ClassVar, Generic, Self, TypeVar, get_type_hints

from app.core.domain.entities import generate_uuid_str, utc_now


def _snake_to_camel(name: str) -> str:
    head, *tail = name.split("_")
    return head + "".join(part.capitalize() for part in tail)


def _serialize(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    return value


@dataclass(frozen=True)
class EventPayload:
    """
    Base class for typed event payloads.

    Field names are serialized in camelCase unless the field declares an
    ``alias`` in its metadata.

    Example:
        ```python
        @dataclass(frozen=True)
        class OrderShipped(EventPayload):
            EVENT_NAME: ClassVar[str] = "order.shipped"

            order_id: str
            shipped_at: datetime
        ```
    """

    EVENT_NAME: ClassVar[str] = ""
    _registry: ClassVar[dict[str, type["EventPayload"]]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if cls.EVENT_NAME:
            EventPayload._registry[cls.EVENT_NAME] = cls

    @classmethod
    def for_name(cls, event_name: str) -> type["EventPayload"]:
        """Look up the payload class registered for an event name."""
        try:
            return cls._registry[event_name]
        except KeyError:
            raise ValueError(f"Unknown event name: {event_name}") from None

    @staticmethod
    def _wire_name(name: str, metadata: Any) -> str:
        return metadata.get("alias") or _snake_to_camel(name)

    def to_primitives(self) -> dict[str, Any]:
        """Serialize the payload to JSON-compatible primitives."""
        return {self._wire_name(f.name, f.metadata): _serialize(getattr(self, f.name)) for f in fields(self)}

    @classmethod
    def from_primitives(cls, data: dict[str, Any]) -> Self:
        """Rebuild a payload from its wire form."""
        hints = get_type_hints(cls)
        kwargs: dict[str, Any] = {}
        for f in fields(cls):
            key = cls._wire_name(f.name, f.metadata)
            if key not in data:
                continue
            value = data[key]
            if hints.get(f.name) is datetime and isinstance(value, str):
                value = datetime.fromisoformat(value)
            kwargs[f.name] = value
        return cls(**kwargs)


P = TypeVar("P", bound=EventPayload)


@dataclass(frozen=True)
class DomainEvent(Generic[P]):
    """
    Envelope for all domain events.

    Domain events are immutable records of something that happened
    in the domain. They capture the fact that something occurred.
    """

    payload: P
    event_id: str = field(default_factory=generate_uuid_str)
    occurred_on: datetime = field(default_factory=utc_now)

    @property
    def event_name(self) -> str:
        """Get the event name declared by the payload."""
        return self.payload.EVENT_NAME

    def to_primitives(self) -> dict[str, Any]:
        """Flatten envelope and payload into a single message body."""
        return {
            "eventId": self.event_id,
            "eventName": self.event_name,
            "occurredOn": self.occurred_on.isoformat(),
            **self.payload.to_primitives(),
        }

    @classmethod
    def from_primitives(cls, data: dict[str, Any]) -> "DomainEvent[Any]":
        """Rebuild an event from a message body produced by ``to_primitives``."""
        payload_cls = EventPayload.for_name(data["eventName"])
        return cls(
            payload=payload_cls.from_primitives(data),
            event_id=data["eventId"],
            occurred_on=datetime.fromisoformat(data["occurredOn"]),
        )
