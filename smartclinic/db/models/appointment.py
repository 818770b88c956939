from sqlmodel import SQLModel, Field
from sqlalchemy import UniqueConstraint
from datetime import datetime, date, time
from uuid import UUID, uuid4

from smartclinic.core.slots import APPOINTMENT_DURATION
from smartclinic.core.utils import NAIVE_DATETIME, utc_now

STATUS_SCHEDULED = 0
STATUS_COMPLETED = 1

class Appointment(SQLModel, table=True):
    __tablename__ = "appointments"
    # one booking per doctor per start time
    __table_args__ = (
        UniqueConstraint("doctor_id", "appointment_time", name="uq_appointment_doctor_time"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    doctor_id: UUID = Field(foreign_key="doctors.id", index=True)
    patient_id: UUID = Field(foreign_key="patients.id", index=True)
    appointment_time: datetime = Field(index=True, sa_type=NAIVE_DATETIME)
    status: int = Field(default=STATUS_SCHEDULED) # 0=scheduled, 1=completed
    created_at: datetime = Field(default_factory=utc_now, sa_type=NAIVE_DATETIME)

    @property
    def end_time(self) -> datetime:
        return self.appointment_time + APPOINTMENT_DURATION

    @property
    def appointment_date(self) -> date:
        return self.appointment_time.date()

    @property
    def appointment_time_only(self) -> time:
        return self.appointment_time.time()
