from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import or_, select

from smartclinic.core.exceptions import BadRequest, Conflict
from smartclinic.core.logger import logger
from smartclinic.core.security import get_password_hash
from smartclinic.db.models import Appointment, Doctor, Patient
from smartclinic.db.models.appointment import STATUS_COMPLETED, STATUS_SCHEDULED
from smartclinic.schemas.appointment import AppointmentDTO
from smartclinic.schemas.patient import PatientCreate
from smartclinic.services.appointment_service import AppointmentService

# "past" appointments are the completed ones, "future" the still scheduled ones
CONDITION_STATUS = {
    "past": STATUS_COMPLETED,
    "future": STATUS_SCHEDULED,
}

class PatientService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def patient_exists(self, email: str, phone: str) -> bool:
        stmt = select(Patient).where(or_(Patient.email == email, Patient.phone == phone))
        result = await self.session.execute(stmt)
        return result.scalars().first() is not None

    async def create_patient(self, data: PatientCreate) -> Patient:
        if await self.patient_exists(data.email, data.phone):
            raise Conflict("Patient with email id or phone no already exist")

        patient = Patient(
            **data.model_dump(exclude={"password"}),
            password_hash=get_password_hash(data.password)
        )
        self.session.add(patient)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise Conflict("Patient with email id or phone no already exist")
        await self.session.refresh(patient)
        logger.info(f"Patient signed up: {patient.id}")
        return patient

    async def get_patient_appointments(
        self,
        patient: Patient,
        condition: Optional[str] = None,
        doctor_name: Optional[str] = None
    ) -> List[AppointmentDTO]:
        conditions = [Appointment.patient_id == patient.id]

        if condition and condition.strip():
            status = CONDITION_STATUS.get(condition.strip().lower())
            if status is None:
                raise BadRequest("Invalid condition. Use 'past' or 'future'")
            conditions.append(Appointment.status == status)

        if doctor_name and doctor_name.strip():
            conditions.append(Doctor.name.ilike(f"%{doctor_name.strip()}%"))

        return await AppointmentService(self.session).list_details(*conditions)
