from sqlmodel import SQLModel, Field
from sqlalchemy import JSON, Column
from typing import List
from datetime import datetime
from uuid import UUID, uuid4

from smartclinic.core.utils import NAIVE_DATETIME, utc_now

class Doctor(SQLModel, table=True):
    __tablename__ = "doctors"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=100, index=True)
    specialty: str = Field(max_length=50, index=True)
    email: str = Field(unique=True, index=True)
    password_hash: str
    phone: str = Field(max_length=12)
    # daily "HH:MM - HH:MM" descriptors, in display order
    available_times: List[str] = Field(default=[], sa_column=Column(JSON))
    created_at: datetime = Field(default_factory=utc_now, sa_type=NAIVE_DATETIME)
