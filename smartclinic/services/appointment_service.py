import asyncio
from datetime import date, datetime, time
from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import delete, select

from smartclinic.core.exceptions import Conflict, Forbidden, NotFound
from smartclinic.core.logger import logger
from smartclinic.db.models import Appointment, Doctor, Patient
from smartclinic.db.models.appointment import STATUS_COMPLETED, STATUS_SCHEDULED
from smartclinic.schemas.appointment import AppointmentCreate, AppointmentDTO, AppointmentUpdate
from smartclinic.services.availability_service import AvailabilityService, SlotValidation

class DoctorLocks:
    """One asyncio.Lock per doctor; booking writes for a doctor run one at a time."""

    def __init__(self):
        self._locks: Dict[UUID, asyncio.Lock] = {}

    def get(self, doctor_id: UUID) -> asyncio.Lock:
        lock = self._locks.get(doctor_id)
        if lock is None:
            lock = self._locks[doctor_id] = asyncio.Lock()
        return lock

doctor_locks = DoctorLocks()

class AppointmentService:
    def __init__(self, session: AsyncSession, locks: DoctorLocks = doctor_locks):
        self.session = session
        self.locks = locks
        self.availability = AvailabilityService(session)

    async def get_appointment(self, appointment_id: UUID) -> Appointment:
        appointment = await self.session.get(Appointment, appointment_id)
        if not appointment:
            raise NotFound("Appointment not found")
        return appointment

    async def save(self, appointment: Appointment) -> Appointment:
        # rollback expires the instance, read these first
        doctor_id, appointment_time = appointment.doctor_id, appointment.appointment_time
        self.session.add(appointment)
        try:
            await self.session.commit()
        except IntegrityError:
            await self.session.rollback()
            logger.warning(f"Double booking rejected for doctor {doctor_id} at {appointment_time}")
            raise Conflict("Appointment time is not available")
        await self.session.refresh(appointment)
        return appointment

    async def delete_all_for_doctor(self, doctor_id: UUID) -> int:
        """Delete a doctor's appointments. The caller commits."""
        result = await self.session.execute(
            delete(Appointment).where(Appointment.doctor_id == doctor_id)
        )
        return result.rowcount

    def _raise_for_validation(self, result: SlotValidation):
        if result == SlotValidation.DOCTOR_NOT_FOUND:
            raise NotFound("Doctor not found")
        if result == SlotValidation.SLOT_UNAVAILABLE:
            raise Conflict("Appointment time is not available")

    async def book(self, patient: Patient, data: AppointmentCreate) -> Appointment:
        async with self.locks.get(data.doctor_id):
            result = await self.availability.validate(data.doctor_id, data.appointment_time)
            self._raise_for_validation(result)

            appointment = Appointment(
                doctor_id=data.doctor_id,
                patient_id=patient.id,
                appointment_time=data.appointment_time,
                status=STATUS_SCHEDULED
            )
            appointment = await self.save(appointment)

        logger.info(
            f"Booked appointment {appointment.id} with doctor {appointment.doctor_id} "
            f"at {appointment.appointment_time}"
        )
        return appointment

    async def update(self, appointment_id: UUID, patient: Patient, data: AppointmentUpdate) -> Appointment:
        async with self.locks.get(data.doctor_id):
            appointment = await self.get_appointment(appointment_id)

            # The appointment's own slot does not count as taken
            result = await self.availability.validate(
                data.doctor_id, data.appointment_time, exclude_appointment_id=appointment.id
            )
            self._raise_for_validation(result)

            if appointment.patient_id != patient.id:
                raise Forbidden("Patient ID mismatch")

            appointment.doctor_id = data.doctor_id
            appointment.appointment_time = data.appointment_time
            appointment.status = data.status
            appointment = await self.save(appointment)

        logger.info(f"Updated appointment {appointment.id}")
        return appointment

    async def cancel(self, appointment_id: UUID, patient: Patient) -> None:
        appointment = await self.get_appointment(appointment_id)
        if appointment.patient_id != patient.id:
            raise Forbidden("Unauthorized: You can only cancel your own appointments")

        await self.session.delete(appointment)
        await self.session.commit()
        logger.info(f"Cancelled appointment {appointment_id}")

    async def complete(self, appointment_id: UUID, doctor: Doctor) -> Appointment:
        appointment = await self.get_appointment(appointment_id)
        if appointment.doctor_id != doctor.id:
            raise Forbidden("Unauthorized: You can only complete your own appointments")

        if appointment.status != STATUS_COMPLETED:
            appointment.status = STATUS_COMPLETED
            appointment = await self.save(appointment)
            logger.info(f"Completed appointment {appointment_id}")
        return appointment

    async def list_details(self, *conditions) -> List[AppointmentDTO]:
        stmt = (
            select(Appointment, Doctor, Patient)
            .join(Doctor, Doctor.id == Appointment.doctor_id)
            .join(Patient, Patient.id == Appointment.patient_id)
            .where(*conditions)
            .order_by(Appointment.appointment_time)
        )
        result = await self.session.execute(stmt)
        return [
            AppointmentDTO.from_records(appointment, doctor, patient)
            for appointment, doctor, patient in result.all()
        ]

    async def get_doctor_appointments(
        self, doctor: Doctor, day: date, patient_name: Optional[str] = None
    ) -> List[AppointmentDTO]:
        conditions = [
            Appointment.doctor_id == doctor.id,
            Appointment.appointment_time >= datetime.combine(day, time.min),
            Appointment.appointment_time <= datetime.combine(day, time.max),
        ]
        if patient_name and patient_name.strip():
            conditions.append(Patient.name.ilike(f"%{patient_name.strip()}%"))
        return await self.list_details(*conditions)
