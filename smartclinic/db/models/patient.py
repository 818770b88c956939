from sqlmodel import SQLModel, Field
from typing import Optional
from datetime import datetime
from uuid import UUID, uuid4

from smartclinic.core.utils import NAIVE_DATETIME, utc_now

class Patient(SQLModel, table=True):
    __tablename__ = "patients"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str
    email: str = Field(unique=True, index=True)
    phone: str = Field(unique=True, index=True)
    address: Optional[str] = None
    password_hash: str
    created_at: datetime = Field(default_factory=utc_now, sa_type=NAIVE_DATETIME)
