from datetime import date
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import delete, func, select

from smartclinic.core.exceptions import BadRequest, Conflict, NotFound
from smartclinic.core.logger import logger
from smartclinic.core.security import get_password_hash
from smartclinic.core.slots import has_slot_in_period
from smartclinic.db.models import Doctor
from smartclinic.schemas.doctor import DoctorCreate, DoctorUpdate
from smartclinic.services.appointment_service import AppointmentService
from smartclinic.services.availability_service import AvailabilityService

PERIODS = ("AM", "PM")

class DoctorService:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_doctor(self, doctor_id: UUID) -> Doctor:
        doctor = await self.session.get(Doctor, doctor_id)
        if not doctor:
            raise NotFound("Doctor not found")
        return doctor

    async def get_doctor_by_email(self, email: str) -> Doctor | None:
        stmt = select(Doctor).where(Doctor.email == email)
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def get_doctors(self) -> List[Doctor]:
        result = await self.session.execute(select(Doctor).order_by(Doctor.name))
        return result.scalars().all()

    async def create_doctor(self, data: DoctorCreate) -> Doctor:
        if await self.get_doctor_by_email(data.email):
            raise Conflict("Doctor already exists")

        doctor = Doctor(
            **data.model_dump(exclude={"password"}),
            password_hash=get_password_hash(data.password)
        )
        self.session.add(doctor)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            raise Conflict("Doctor already exists")
        await self.session.refresh(doctor)
        logger.info(f"Created doctor {doctor.id} ({doctor.email})")
        return doctor

    async def update_doctor(self, doctor_id: UUID, data: DoctorUpdate) -> Doctor:
        doctor = await self.get_doctor(doctor_id)

        update_data = data.model_dump(exclude_unset=True)
        email = update_data.get("email")
        if email and email != doctor.email:
            other = await self.get_doctor_by_email(email)
            if other and other.id != doctor.id:
                raise Conflict("Email already used by another doctor")

        password = update_data.pop("password", None)
        if password:
            doctor.password_hash = get_password_hash(password)

        for key, value in update_data.items():
            if value is not None:
                setattr(doctor, key, value)

        self.session.add(doctor)
        await self.session.commit()
        await self.session.refresh(doctor)
        return doctor

    async def delete_doctor(self, doctor_id: UUID) -> None:
        await self.get_doctor(doctor_id)

        # Appointments go first, in the same transaction
        removed = await AppointmentService(self.session).delete_all_for_doctor(doctor_id)
        await self.session.execute(delete(Doctor).where(Doctor.id == doctor_id))
        await self.session.commit()
        logger.info(f"Deleted doctor {doctor_id} and {removed} appointment(s)")

    async def filter_doctors(
        self,
        name: Optional[str] = None,
        specialty: Optional[str] = None,
        period: Optional[str] = None
    ) -> List[Doctor]:
        """
        Doctors matching every filter given; no filters returns the whole
        directory.

        - name: case-insensitive substring of the doctor's name
        - specialty: case-insensitive exact specialty
        - period: "AM" or "PM", the doctor has a slot starting in that half of the day
        """
        name = name.strip() if name else None
        specialty = specialty.strip() if specialty else None
        period = period.strip().upper() if period and period.strip() else None
        if period and period not in PERIODS:
            raise BadRequest("Invalid time period. Use 'AM' or 'PM'")

        stmt = select(Doctor)
        if name:
            stmt = stmt.where(Doctor.name.ilike(f"%{name}%"))
        if specialty:
            stmt = stmt.where(func.lower(Doctor.specialty) == specialty.lower())
        stmt = stmt.order_by(Doctor.name)

        result = await self.session.execute(stmt)
        doctors = result.scalars().all()

        if period:
            doctors = [d for d in doctors if has_slot_in_period(d.available_times or [], period)]
        return doctors

    async def get_doctor_availability(self, doctor_id: UUID, day: date) -> List[str]:
        return await AvailabilityService(self.session).compute_free_slots(doctor_id, day)
