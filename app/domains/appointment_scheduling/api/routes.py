"""
Appointment Scheduling API Routes

FastAPI router for the appointment endpoints. Domain exceptions raised by
the use cases are turned into JSON errors by the application exception
handlers.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, status

from app.domains.appointment_scheduling.api.dependencies import (
    get_appointments_use_case,
    get_create_appointment_use_case,
)
from app.domains.appointment_scheduling.api.schemas import (
    AppointmentListResponse,
    AppointmentResponse,
    CreateAppointmentRequest,
    CreateAppointmentResponse,
)
from app.domains.appointment_scheduling.application.dto import (
    CreateAppointmentDto,
    GetAppointmentsByInsuredIdDto,
)
from app.domains.appointment_scheduling.application.use_cases import (
    CreateAppointmentUseCase,
    GetAppointmentsByInsuredIdUseCase,
)

router = APIRouter(prefix="/appointments", tags=["Appointments"])

# Type aliases for use case dependencies
CreateAppointmentUseCaseDep = Annotated[CreateAppointmentUseCase, Depends(get_create_appointment_use_case)]
GetAppointmentsUseCaseDep = Annotated[GetAppointmentsByInsuredIdUseCase, Depends(get_appointments_use_case)]


@router.post(
    "",
    response_model=CreateAppointmentResponse,
    response_model_by_alias=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_appointment(
    request: CreateAppointmentRequest,
    use_case: CreateAppointmentUseCaseDep,
):
    """Request an appointment. Processing continues asynchronously in the country worker."""
    result = await use_case.execute(
        CreateAppointmentDto(
            country_iso=request.country_iso,
            insured_id=request.insured_id,
            schedule_id=request.schedule_id,
        )
    )

    return CreateAppointmentResponse(
        appointment_id=result.appointment_id,
        message=result.message,
        status=result.status,
    )


@router.get("/{insured_id}", response_model=AppointmentListResponse, response_model_by_alias=True)
async def get_appointments_by_insured_id(
    insured_id: Annotated[str, Path(description="Insured id, padded to five digits if shorter")],
    use_case: GetAppointmentsUseCaseDep,
):
    """List every appointment of an insured patient."""
    result = await use_case.execute(GetAppointmentsByInsuredIdDto(insured_id=insured_id))

    return AppointmentListResponse(
        appointments=[AppointmentResponse.from_dto(dto) for dto in result.appointments],
    )
