from pydantic import BaseModel, Field
from typing import Optional
from uuid import UUID

from smartclinic.schemas.doctor import EMAIL_PATTERN, PHONE_PATTERN

class PatientCreate(BaseModel):
    name: str = Field(min_length=3, max_length=100)
    email: str = Field(pattern=EMAIL_PATTERN)
    phone: str = Field(pattern=PHONE_PATTERN)
    address: Optional[str] = Field(default=None, max_length=255)
    password: str = Field(min_length=6)

class PatientResponse(BaseModel):
    id: UUID
    name: str
    email: str
    phone: str
    address: Optional[str] = None

    class Config:
        from_attributes = True
