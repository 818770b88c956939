from datetime import date, datetime, time
from enum import Enum
from typing import List, Optional, Set
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from smartclinic.core.logger import logger
from smartclinic.core.slots import TimeSlot
from smartclinic.db.models import Appointment, Doctor

class SlotValidation(str, Enum):
    VALID = "valid"
    DOCTOR_NOT_FOUND = "doctor_not_found"
    SLOT_UNAVAILABLE = "slot_unavailable"

class AvailabilityService:
    """Free-slot computation and booking validation. Never writes."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_appointments_for_doctor_in_range(
        self, doctor_id: UUID, start: datetime, end: datetime
    ) -> List[Appointment]:
        stmt = select(Appointment).where(
            Appointment.doctor_id == doctor_id,
            Appointment.appointment_time >= start,
            Appointment.appointment_time <= end
        ).order_by(Appointment.appointment_time)
        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def get_booked_starts(
        self, doctor_id: UUID, day: date, exclude_appointment_id: Optional[UUID] = None
    ) -> Set[time]:
        appointments = await self.get_appointments_for_doctor_in_range(
            doctor_id,
            datetime.combine(day, time.min),
            datetime.combine(day, time.max)
        )
        return {
            TimeSlot.starting_at(appointment.appointment_time.time()).start
            for appointment in appointments
            if appointment.id != exclude_appointment_id
        }

    async def compute_free_slots(
        self, doctor_id: UUID, day: date, exclude_appointment_id: Optional[UUID] = None
    ) -> List[str]:
        """
        Configured slots of the doctor minus the ones already booked on ``day``.

        An unknown doctor has no free slots. Storage failures are logged and
        reported as no free slots as well.
        """
        try:
            doctor = await self.session.get(Doctor, doctor_id)
            if not doctor:
                return []
            booked = await self.get_booked_starts(doctor_id, day, exclude_appointment_id)
        except SQLAlchemyError:
            logger.exception(f"Failed to compute availability for doctor {doctor_id} on {day}")
            return []

        free_slots = []
        for descriptor in doctor.available_times or []:
            try:
                slot = TimeSlot.parse(descriptor)
            except ValueError:
                logger.warning(f"Skipping malformed slot '{descriptor}' of doctor {doctor_id}")
                continue
            if slot.start not in booked:
                free_slots.append(descriptor)
        return free_slots

    async def validate(
        self, doctor_id: UUID, appointment_time: datetime, exclude_appointment_id: Optional[UUID] = None
    ) -> SlotValidation:
        doctor = await self.session.get(Doctor, doctor_id)
        if not doctor:
            return SlotValidation.DOCTOR_NOT_FOUND

        free_slots = await self.compute_free_slots(
            doctor_id, appointment_time.date(), exclude_appointment_id
        )
        requested = appointment_time.time().replace(second=0, microsecond=0)

        for descriptor in free_slots:
            if TimeSlot.parse(descriptor).start == requested:
                return SlotValidation.VALID

        return SlotValidation.SLOT_UNAVAILABLE
