from sqlmodel import SQLModel, Field
from datetime import datetime
from uuid import UUID, uuid4

from smartclinic.core.utils import NAIVE_DATETIME, utc_now

class Admin(SQLModel, table=True):
    __tablename__ = "admins"
    id: UUID = Field(default_factory=uuid4, primary_key=True)
    username: str = Field(unique=True, index=True)
    password_hash: str
    created_at: datetime = Field(default_factory=utc_now, sa_type=NAIVE_DATETIME)
