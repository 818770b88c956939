from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from smartclinic.api.deps import get_current_patient
from smartclinic.db.models import Patient
from smartclinic.db.session import get_session
from smartclinic.schemas.appointment import AppointmentListResponse
from smartclinic.schemas.patient import PatientCreate, PatientResponse
from smartclinic.services.patient_service import PatientService

router = APIRouter()

async def get_patient_service(session: AsyncSession = Depends(get_session)) -> PatientService:
    return PatientService(session)

@router.post("/", response_model=PatientResponse, status_code=201)
async def create_patient(
    payload: PatientCreate,
    service: PatientService = Depends(get_patient_service)
):
    return await service.create_patient(payload)

@router.get("/me", response_model=PatientResponse)
async def read_patient(patient: Patient = Depends(get_current_patient)):
    return patient

@router.get("/me/appointments", response_model=AppointmentListResponse)
async def read_patient_appointments(
    condition: Optional[str] = None,
    doctor_name: Optional[str] = None,
    patient: Patient = Depends(get_current_patient),
    service: PatientService = Depends(get_patient_service)
):
    appointments = await service.get_patient_appointments(patient, condition, doctor_name)
    return AppointmentListResponse(appointments=appointments)
