from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from uuid import UUID

from smartclinic.api.deps import get_current_doctor
from smartclinic.db.models import Doctor
from smartclinic.db.session import get_session
from smartclinic.schemas.prescription import PrescriptionCreate, PrescriptionResponse
from smartclinic.services.prescription_service import PrescriptionService

router = APIRouter()

async def get_prescription_service(session: AsyncSession = Depends(get_session)) -> PrescriptionService:
    return PrescriptionService(session)

@router.post("/", response_model=PrescriptionResponse, status_code=201)
async def save_prescription(
    prescription: PrescriptionCreate,
    doctor: Doctor = Depends(get_current_doctor),
    service: PrescriptionService = Depends(get_prescription_service)
):
    return await service.save_prescription(doctor, prescription)

@router.get("/{appointment_id}", response_model=PrescriptionResponse)
async def read_prescription(
    appointment_id: UUID,
    doctor: Doctor = Depends(get_current_doctor),
    service: PrescriptionService = Depends(get_prescription_service)
):
    return await service.get_prescription(appointment_id)
