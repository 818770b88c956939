from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from uuid import UUID
from datetime import date as Date, datetime

from smartclinic.core.slots import normalize_slots

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"
PHONE_PATTERN = r"^\d{3}-\d{3}-\d{4}$"

class DoctorBase(BaseModel):
    name: str = Field(min_length=3, max_length=100)
    specialty: str = Field(min_length=3, max_length=50)
    email: str = Field(pattern=EMAIL_PATTERN)
    phone: str = Field(pattern=PHONE_PATTERN)
    available_times: List[str] = []

    @field_validator("available_times")
    @classmethod
    def check_available_times(cls, value: List[str]) -> List[str]:
        return normalize_slots(value)

class DoctorCreate(DoctorBase):
    password: str = Field(min_length=6)

class DoctorUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=3, max_length=100)
    specialty: Optional[str] = Field(default=None, min_length=3, max_length=50)
    email: Optional[str] = Field(default=None, pattern=EMAIL_PATTERN)
    phone: Optional[str] = Field(default=None, pattern=PHONE_PATTERN)
    password: Optional[str] = Field(default=None, min_length=6)
    available_times: Optional[List[str]] = None

    @field_validator("available_times")
    @classmethod
    def check_available_times(cls, value: Optional[List[str]]) -> Optional[List[str]]:
        if value is None:
            return value
        return normalize_slots(value)

class DoctorResponse(BaseModel):
    id: UUID
    name: str
    specialty: str
    email: str
    phone: str
    available_times: List[str]
    created_at: datetime

    class Config:
        from_attributes = True

class DoctorListResponse(BaseModel):
    doctors: List[DoctorResponse]

class AvailabilityResponse(BaseModel):
    doctor_id: UUID
    date: Date
    availability: List[str]
