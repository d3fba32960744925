"""
Queue and stream wire contracts.

Jobs on the arq queues are called with two arguments: the message ``body``
(a JSON-compatible dict) and its routing ``attributes``. Audit streams
(event bus, dead-letter) store the same pair as two JSON string fields.
"""

import json
from dataclasses import dataclass, field
from typing import Any

PROCESS_COUNTRY_APPOINTMENT_JOB = "process_country_appointment"
COMPLETE_APPOINTMENT_JOB = "complete_appointment"

BODY_FIELD = "body"
ATTRIBUTES_FIELD = "attributes"


@dataclass(frozen=True)
class QueueMessage:
    """One job delivery as seen by a handler."""

    job_id: str
    body: dict[str, Any]
    attributes: dict[str, str] = field(default_factory=dict)
    job_try: int = 1


def encode_message(body: dict[str, Any], attributes: dict[str, str] | None = None) -> dict[str, str]:
    """Stream entry fields for an audit stream."""
    return {
        BODY_FIELD: json.dumps(body, default=str),
        ATTRIBUTES_FIELD: json.dumps(attributes or {}),
    }
