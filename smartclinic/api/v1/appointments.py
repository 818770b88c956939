from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from smartclinic.api.deps import get_current_doctor, get_current_patient
from smartclinic.core.exceptions import Forbidden
from smartclinic.db.models import Doctor, Patient
from smartclinic.db.session import get_session
from smartclinic.schemas.appointment import (
    AppointmentCreate,
    AppointmentResponse,
    AppointmentUpdate,
)
from smartclinic.schemas.auth import MessageResponse
from smartclinic.services.appointment_service import AppointmentService

router = APIRouter()

async def get_appointment_service(session: AsyncSession = Depends(get_session)) -> AppointmentService:
    return AppointmentService(session)

@router.post("/", response_model=AppointmentResponse, status_code=201)
async def book_appointment(
    request: AppointmentCreate,
    patient: Patient = Depends(get_current_patient),
    service: AppointmentService = Depends(get_appointment_service)
):
    return await service.book(patient, request)

@router.get("/{appointment_id}", response_model=AppointmentResponse)
async def read_appointment(
    appointment_id: UUID,
    patient: Patient = Depends(get_current_patient),
    service: AppointmentService = Depends(get_appointment_service)
):
    appointment = await service.get_appointment(appointment_id)
    if appointment.patient_id != patient.id:
        raise Forbidden("Unauthorized: You can only view your own appointments")
    return appointment

@router.put("/{appointment_id}", response_model=AppointmentResponse)
async def update_appointment(
    appointment_id: UUID,
    request: AppointmentUpdate,
    patient: Patient = Depends(get_current_patient),
    service: AppointmentService = Depends(get_appointment_service)
):
    return await service.update(appointment_id, patient, request)

@router.delete("/{appointment_id}", response_model=MessageResponse)
async def cancel_appointment(
    appointment_id: UUID,
    patient: Patient = Depends(get_current_patient),
    service: AppointmentService = Depends(get_appointment_service)
):
    await service.cancel(appointment_id, patient)
    return MessageResponse(message="Appointment cancelled successfully")

@router.post("/{appointment_id}/complete", response_model=AppointmentResponse)
async def complete_appointment(
    appointment_id: UUID,
    doctor: Doctor = Depends(get_current_doctor),
    service: AppointmentService = Depends(get_appointment_service)
):
    return await service.complete(appointment_id, doctor)
