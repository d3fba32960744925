"""
Appointment Scheduling API Schemas

Pydantic schemas for API request/response validation. Field names on the
wire are camelCase.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.domains.appointment_scheduling.application.dto import AppointmentDTO


class CreateAppointmentRequest(BaseModel):
    """Appointment request schema."""

    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    country_iso: str = Field(..., alias="countryISO", min_length=1, examples=["PE"])
    insured_id: str = Field(..., alias="insuredId", min_length=1, examples=["00123"])
    schedule_id: int = Field(..., alias="scheduleId", gt=0, examples=[100])


class CreateAppointmentResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    appointment_id: str = Field(..., alias="appointmentId")
    message: str
    status: str


class AppointmentResponse(BaseModel):
    """Appointment as stored in the append store."""

    model_config = ConfigDict(populate_by_name=True)

    appointment_id: str = Field(..., alias="appointmentId")
    insured_id: str = Field(..., alias="insuredId")
    country_iso: str = Field(..., alias="countryISO")
    schedule_id: int = Field(..., alias="scheduleId")
    status: str
    created_at: str = Field(..., alias="createdAt")
    updated_at: str = Field(..., alias="updatedAt")
    processed_at: str | None = Field(None, alias="processedAt")
    schedule: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_dto(cls, dto: AppointmentDTO) -> "AppointmentResponse":
        return cls(
            appointment_id=dto.appointment_id,
            insured_id=dto.insured_id,
            country_iso=dto.country_iso,
            schedule_id=dto.schedule_id,
            status=dto.status,
            created_at=dto.created_at,
            updated_at=dto.updated_at,
            processed_at=dto.processed_at,
            schedule=dto.schedule,
        )


class AppointmentListResponse(BaseModel):
    appointments: list[AppointmentResponse] = Field(default_factory=list)
