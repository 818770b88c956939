from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime
from uuid import UUID, uuid4

from smartclinic.core.utils import NAIVE_DATETIME, utc_now

class Prescription(SQLModel, table=True):
    __tablename__ = "prescriptions"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    # plain reference, survives deletion of the appointment
    appointment_id: UUID = Field(unique=True, index=True)
    patient_name: str = Field(max_length=100)
    medication: str = Field(max_length=100)
    dosage: str
    doctor_notes: Optional[str] = Field(default=None, max_length=200)
    created_at: datetime = Field(default_factory=utc_now, sa_type=NAIVE_DATETIME)
