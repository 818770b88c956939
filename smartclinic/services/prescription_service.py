from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from smartclinic.core.exceptions import Conflict, Forbidden, NotFound
from smartclinic.core.logger import logger
from smartclinic.db.models import Appointment, Doctor, Prescription
from smartclinic.schemas.prescription import PrescriptionCreate

class PrescriptionService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_appointment(self, appointment_id: UUID) -> Prescription | None:
        stmt = select(Prescription).where(Prescription.appointment_id == appointment_id)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def save_prescription(self, doctor: Doctor, data: PrescriptionCreate) -> Prescription:
        appointment = await self.session.get(Appointment, data.appointment_id)
        if not appointment:
            raise NotFound("Appointment not found")
        if appointment.doctor_id != doctor.id:
            raise Forbidden("Unauthorized: You can only prescribe for your own appointments")

        if await self.get_by_appointment(data.appointment_id):
            raise Conflict("Prescription already exists for this appointment")

        prescription = Prescription(**data.model_dump())
        self.session.add(prescription)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise Conflict("Prescription already exists for this appointment")
        await self.session.refresh(prescription)
        logger.info(f"Saved prescription for appointment {data.appointment_id}")
        return prescription

    async def get_prescription(self, appointment_id: UUID) -> Prescription:
        prescription = await self.get_by_appointment(appointment_id)
        if not prescription:
            raise NotFound("No prescription found for this appointment")
        return prescription
