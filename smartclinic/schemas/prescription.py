from pydantic import BaseModel, Field
from typing import Optional
from uuid import UUID
from datetime import datetime

class PrescriptionCreate(BaseModel):
    appointment_id: UUID
    patient_name: str = Field(min_length=3, max_length=100)
    medication: str = Field(min_length=3, max_length=100)
    dosage: str = Field(min_length=1)
    doctor_notes: Optional[str] = Field(default=None, max_length=200)

class PrescriptionResponse(PrescriptionCreate):
    id: UUID
    created_at: datetime

    class Config:
        from_attributes = True
