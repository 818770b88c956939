from pydantic import BaseModel, Field, field_validator
from uuid import UUID
from datetime import datetime, date, time, timezone
from typing import Optional, List, Literal

from smartclinic.core.utils import utc_now
from smartclinic.db.models import Appointment, Doctor, Patient

def normalize_appointment_time(value: datetime) -> datetime:
    # Ensure naive UTC, minute precision
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.replace(second=0, microsecond=0)

class AppointmentCreate(BaseModel):
    doctor_id: UUID
    appointment_time: datetime

    @field_validator("appointment_time")
    @classmethod
    def check_future(cls, value: datetime) -> datetime:
        value = normalize_appointment_time(value)
        if value <= utc_now():
            raise ValueError("Appointment time must be in the future")
        return value

class AppointmentUpdate(AppointmentCreate):
    status: Literal[0, 1] = 0

class AppointmentResponse(BaseModel):
    id: UUID
    doctor_id: UUID
    patient_id: UUID
    appointment_time: datetime
    end_time: datetime
    status: int

    class Config:
        from_attributes = True

class AppointmentDTO(BaseModel):
    id: UUID
    doctor_id: UUID
    doctor_name: str
    patient_id: UUID
    patient_name: str
    patient_email: str
    patient_phone: str
    patient_address: Optional[str] = None
    appointment_time: datetime
    status: int
    appointment_date: date
    appointment_time_only: time
    end_time: datetime

    @classmethod
    def from_records(cls, appointment: Appointment, doctor: Doctor, patient: Patient) -> "AppointmentDTO":
        return cls(
            id=appointment.id,
            doctor_id=doctor.id,
            doctor_name=doctor.name,
            patient_id=patient.id,
            patient_name=patient.name,
            patient_email=patient.email,
            patient_phone=patient.phone,
            patient_address=patient.address,
            appointment_time=appointment.appointment_time,
            status=appointment.status,
            appointment_date=appointment.appointment_date,
            appointment_time_only=appointment.appointment_time_only,
            end_time=appointment.end_time,
        )

class AppointmentListResponse(BaseModel):
    appointments: List[AppointmentDTO] = Field(default_factory=list)
