from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from smartclinic.api.deps import get_current_admin, get_current_doctor, get_principal
from smartclinic.db.models import Admin, Doctor
from smartclinic.db.session import get_session
from smartclinic.schemas.appointment import AppointmentListResponse
from smartclinic.schemas.auth import MessageResponse, Principal
from smartclinic.schemas.doctor import (
    AvailabilityResponse,
    DoctorCreate,
    DoctorListResponse,
    DoctorResponse,
    DoctorUpdate,
)
from smartclinic.services.appointment_service import AppointmentService
from smartclinic.services.doctor_service import DoctorService

router = APIRouter()

async def get_doctor_service(session: AsyncSession = Depends(get_session)) -> DoctorService:
    return DoctorService(session)

@router.get("/", response_model=DoctorListResponse)
async def read_doctors(
    name: Optional[str] = None,
    specialty: Optional[str] = None,
    time: Optional[str] = Query(default=None, description="AM or PM"),
    service: DoctorService = Depends(get_doctor_service)
):
    doctors = await service.filter_doctors(name=name, specialty=specialty, period=time)
    return DoctorListResponse(doctors=doctors)

@router.post("/", response_model=DoctorResponse, status_code=201)
async def create_doctor(
    doctor: DoctorCreate,
    admin: Admin = Depends(get_current_admin),
    service: DoctorService = Depends(get_doctor_service)
):
    return await service.create_doctor(doctor)

@router.get("/me/appointments", response_model=AppointmentListResponse)
async def read_my_appointments(
    date: date,
    patient_name: Optional[str] = None,
    doctor: Doctor = Depends(get_current_doctor),
    session: AsyncSession = Depends(get_session)
):
    appointments = await AppointmentService(session).get_doctor_appointments(doctor, date, patient_name)
    return AppointmentListResponse(appointments=appointments)

@router.get("/{doctor_id}", response_model=DoctorResponse)
async def read_doctor(
    doctor_id: UUID,
    service: DoctorService = Depends(get_doctor_service)
):
    return await service.get_doctor(doctor_id)

@router.put("/{doctor_id}", response_model=DoctorResponse)
async def update_doctor(
    doctor_id: UUID,
    doctor_update: DoctorUpdate,
    admin: Admin = Depends(get_current_admin),
    service: DoctorService = Depends(get_doctor_service)
):
    return await service.update_doctor(doctor_id, doctor_update)

@router.delete("/{doctor_id}", response_model=MessageResponse)
async def delete_doctor(
    doctor_id: UUID,
    admin: Admin = Depends(get_current_admin),
    service: DoctorService = Depends(get_doctor_service)
):
    await service.delete_doctor(doctor_id)
    return MessageResponse(message="Doctor deleted successfully")

@router.get("/{doctor_id}/availability", response_model=AvailabilityResponse)
async def read_doctor_availability(
    doctor_id: UUID,
    date: date,
    principal: Principal = Depends(get_principal),
    service: DoctorService = Depends(get_doctor_service)
):
    availability = await service.get_doctor_availability(doctor_id, date)
    return AvailabilityResponse(doctor_id=doctor_id, date=date, availability=availability)
