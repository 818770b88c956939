import pytest
from sqlalchemy import DateTime

from smartclinic.core.utils import utc_now
from smartclinic.db.models import Admin, Appointment, Doctor, Patient, Prescription
from smartclinic.schemas.appointment import AppointmentCreate
from smartclinic.services.appointment_service import AppointmentService, DoctorLocks
from tests.helpers import at

@pytest.mark.parametrize("column", [
    Admin.__table__.c.created_at,
    Doctor.__table__.c.created_at,
    Patient.__table__.c.created_at,
    Prescription.__table__.c.created_at,
    Appointment.__table__.c.created_at,
    Appointment.__table__.c.appointment_time,
])
def test_timestamps_are_naive_columns(column):
    assert type(column.type) is DateTime
    assert column.type.timezone is False

@pytest.mark.asyncio
async def test_stored_times_read_back_naive(session_maker, doctor, patient, booking_day):
    async with session_maker() as session:
        booked = await AppointmentService(session, locks=DoctorLocks()).book(
            patient, AppointmentCreate(doctor_id=doctor.id, appointment_time=at(booking_day, "09:00"))
        )

    async with session_maker() as session:
        appointment = await session.get(Appointment, booked.id)

    assert appointment.appointment_time == at(booking_day, "09:00")
    assert appointment.appointment_time.tzinfo is None
    assert appointment.created_at.tzinfo is None
    assert appointment.created_at <= utc_now()
