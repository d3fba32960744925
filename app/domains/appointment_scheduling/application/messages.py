# ============================================================================
# SCOPE: APPLICATION LAYER (Appointment Scheduling)
# Description: Queue message contracts for the country and completion workers.
# ============================================================================
"""Queue message contracts.

Country queues and the completion queue carry the same body:

    {"appointmentId": "<uuid>", "insuredId": "00123", "countryISO": "PE",
     "scheduleId": 100, "status": "processed",
     "processedAt": "2026-01-01T09:00:00+00:00"}

``processedAt`` is optional and carries the instant the country worker
confirmed the appointment. Extra keys (event envelope fields) are ignored.
"""

import logging
from typing import Any, Literal

from pydantic import AwareDatetime, BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from app.core.domain.exceptions import ValidationException
from app.domains.appointment_scheduling.domain.exceptions import InvalidAppointmentIdError
from app.domains.appointment_scheduling.domain.value_objects import AppointmentId

from .dto import CompleteAppointmentDto, ProcessCountryAppointmentDto

logger = logging.getLogger(__name__)

PROCESSED_STATUS = "processed"


class InvalidMessageError(ValidationException):
    """Raised when a queue message does not match its contract."""

    def __init__(self, errors: list[dict[str, Any]]):
        fields = [".".join(str(part) for part in error["loc"]) for error in errors]
        super().__init__(
            f"Invalid appointment message: {', '.join(fields) or 'body'}",
            details={"errors": [{"field": f, "message": e["msg"]} for f, e in zip(fields, errors, strict=True)]},
        )


class AppointmentMessage(BaseModel):
    """Body of a country queue or completion queue message."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True, extra="ignore")

    appointment_id: str = Field(..., alias="appointmentId")
    insured_id: str = Field(..., alias="insuredId", pattern=r"^\d{5}$")
    country_iso: Literal["PE", "CL"] = Field(..., alias="countryISO")
    schedule_id: int = Field(..., alias="scheduleId", gt=0, strict=True)
    status: str | None = None
    processed_at: AwareDatetime | None = Field(None, alias="processedAt")

    @field_validator("appointment_id")
    @classmethod
    def validate_appointment_id(cls, v: str) -> str:
        try:
            AppointmentId.from_string(v)
        except InvalidAppointmentIdError as e:
            raise PydanticCustomError("appointment_id_invalid", e.message, {}) from None
        return v

    @field_validator("country_iso", mode="before")
    @classmethod
    def normalize_country(cls, v: Any) -> Any:
        return v.upper() if isinstance(v, str) else v

    def is_processed(self) -> bool:
        return (self.status or "").lower() == PROCESSED_STATUS

    def to_process_dto(self) -> ProcessCountryAppointmentDto:
        return ProcessCountryAppointmentDto(
            appointment_id=self.appointment_id,
            insured_id=self.insured_id,
            country_iso=self.country_iso,
            schedule_id=self.schedule_id,
        )

    def to_complete_dto(self) -> CompleteAppointmentDto:
        return CompleteAppointmentDto(
            appointment_id=self.appointment_id,
            insured_id=self.insured_id,
            country_iso=self.country_iso,
            schedule_id=self.schedule_id,
            processed_at=self.processed_at,
        )


def parse_appointment_message(body: dict[str, Any] | str | bytes) -> AppointmentMessage:
    """Validate a raw message body.

    Raises:
        InvalidMessageError: If the body does not match the contract.
    """
    try:
        if isinstance(body, (str, bytes)):
            return AppointmentMessage.model_validate_json(body)
        return AppointmentMessage.model_validate(body)
    except ValidationError as e:
        raise InvalidMessageError(e.errors()) from e


def parse_completion_message(body: dict[str, Any] | str | bytes) -> CompleteAppointmentDto | None:
    """Validate a completion queue message.

    Returns:
        The completion DTO, or None when the message does not report a
        processed appointment and must be skipped.
    """
    message = parse_appointment_message(body)
    if not message.is_processed():
        logger.info(
            f"Skipping completion message for appointment {message.appointment_id}: "
            f"status is {message.status!r}, expected {PROCESSED_STATUS!r}"
        )
        return None
    return message.to_complete_dto()
