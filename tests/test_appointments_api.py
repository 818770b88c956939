import uuid
from datetime import timedelta

import pytest

from smartclinic.core.utils import utc_now
from tests.helpers import DOCTOR_PASSWORD, at, login

def booking(doctor, when):
    return {"doctor_id": str(doctor.id), "appointment_time": when.isoformat()}

@pytest.mark.asyncio
async def test_booking_flow(client, doctor, patient_headers, other_patient_headers, booking_day):
    availability_url = f"/api/v1/doctors/{doctor.id}/availability"
    params = {"date": booking_day.isoformat()}

    # 1. P1 books 09:00
    response = await client.post(
        "/api/v1/appointments/", json=booking(doctor, at(booking_day, "09:00")), headers=patient_headers
    )
    assert response.status_code == 201
    appointment = response.json()
    assert appointment["status"] == 0
    assert appointment["end_time"] == at(booking_day, "10:00").isoformat()

    response = await client.get(availability_url, params=params, headers=patient_headers)
    assert response.json()["availability"] == ["10:00 - 11:00"]

    # 2. P2 is refused the same slot and a half-hour offset
    response = await client.post(
        "/api/v1/appointments/", json=booking(doctor, at(booking_day, "09:00")), headers=other_patient_headers
    )
    assert response.status_code == 409
    response = await client.post(
        "/api/v1/appointments/", json=booking(doctor, at(booking_day, "09:30")), headers=other_patient_headers
    )
    assert response.status_code == 409

    # 3. P1 cancels, both slots are free again
    response = await client.delete(f"/api/v1/appointments/{appointment['id']}", headers=patient_headers)
    assert response.status_code == 200

    response = await client.get(availability_url, params=params, headers=patient_headers)
    assert response.json()["availability"] == ["09:00 - 10:00", "10:00 - 11:00"]

    response = await client.get(f"/api/v1/appointments/{appointment['id']}", headers=patient_headers)
    assert response.status_code == 404

@pytest.mark.asyncio
async def test_booking_in_the_past(client, doctor, patient_headers):
    yesterday = utc_now().replace(hour=9, minute=0, second=0, microsecond=0) - timedelta(days=1)
    response = await client.post(
        "/api/v1/appointments/", json=booking(doctor, yesterday), headers=patient_headers
    )
    assert response.status_code == 422

@pytest.mark.asyncio
async def test_booking_unknown_doctor(client, patient_headers, booking_day):
    response = await client.post(
        "/api/v1/appointments/",
        json={"doctor_id": str(uuid.uuid4()), "appointment_time": at(booking_day, "09:00").isoformat()},
        headers=patient_headers,
    )
    assert response.status_code == 404

@pytest.mark.asyncio
async def test_booking_requires_patient(client, doctor, doctor_headers, booking_day):
    response = await client.post("/api/v1/appointments/", json=booking(doctor, at(booking_day, "09:00")))
    assert response.status_code == 401

    response = await client.post(
        "/api/v1/appointments/", json=booking(doctor, at(booking_day, "09:00")), headers=doctor_headers
    )
    assert response.status_code == 403

@pytest.mark.asyncio
async def test_timezone_aware_time_is_stored_as_utc(client, doctor, patient_headers, booking_day):
    # 11:00 at UTC+2 is the 09:00 slot
    when = at(booking_day, "11:00").isoformat() + "+02:00"
    response = await client.post(
        "/api/v1/appointments/",
        json={"doctor_id": str(doctor.id), "appointment_time": when},
        headers=patient_headers,
    )
    assert response.status_code == 201
    assert response.json()["appointment_time"] == at(booking_day, "09:00").isoformat()

@pytest.mark.asyncio
async def test_read_appointment_ownership(client, doctor, patient_headers, other_patient_headers, booking_day):
    response = await client.post(
        "/api/v1/appointments/", json=booking(doctor, at(booking_day, "09:00")), headers=patient_headers
    )
    appointment_id = response.json()["id"]

    response = await client.get(f"/api/v1/appointments/{appointment_id}", headers=patient_headers)
    assert response.status_code == 200

    response = await client.get(f"/api/v1/appointments/{appointment_id}", headers=other_patient_headers)
    assert response.status_code == 403

@pytest.mark.asyncio
async def test_update_appointment(client, doctor, patient_headers, other_patient_headers, booking_day):
    response = await client.post(
        "/api/v1/appointments/", json=booking(doctor, at(booking_day, "09:00")), headers=patient_headers
    )
    appointment_id = response.json()["id"]
    url = f"/api/v1/appointments/{appointment_id}"

    # Same slot again is fine
    response = await client.put(url, json=booking(doctor, at(booking_day, "09:00")), headers=patient_headers)
    assert response.status_code == 200

    response = await client.put(url, json=booking(doctor, at(booking_day, "10:00")), headers=patient_headers)
    assert response.status_code == 200
    assert response.json()["appointment_time"] == at(booking_day, "10:00").isoformat()

    response = await client.put(
        url, json=booking(doctor, at(booking_day, "09:00")), headers=other_patient_headers
    )
    assert response.status_code == 403

    response = await client.put(
        f"/api/v1/appointments/{uuid.uuid4()}", json=booking(doctor, at(booking_day, "09:00")), headers=patient_headers
    )
    assert response.status_code == 404

    response = await client.put(
        url, json={**booking(doctor, at(booking_day, "09:00")), "status": 5}, headers=patient_headers
    )
    assert response.status_code == 422

@pytest.mark.asyncio
async def test_cancel_someone_elses_appointment(client, doctor, patient_headers, other_patient_headers, booking_day):
    response = await client.post(
        "/api/v1/appointments/", json=booking(doctor, at(booking_day, "09:00")), headers=patient_headers
    )
    url = f"/api/v1/appointments/{response.json()['id']}"

    response = await client.delete(url, headers=other_patient_headers)
    assert response.status_code == 403

    response = await client.delete(url, headers=patient_headers)
    assert response.status_code == 200

@pytest.mark.asyncio
async def test_complete_appointment(client, doctor, other_doctor, doctor_headers, patient_headers, booking_day):
    response = await client.post(
        "/api/v1/appointments/", json=booking(doctor, at(booking_day, "09:00")), headers=patient_headers
    )
    url = f"/api/v1/appointments/{response.json()['id']}/complete"

    response = await client.post(url, headers=patient_headers)
    assert response.status_code == 403

    other_headers = await login(client, "doctor", other_doctor.email, DOCTOR_PASSWORD)
    response = await client.post(url, headers=other_headers)
    assert response.status_code == 403

    response = await client.post(url, headers=doctor_headers)
    assert response.status_code == 200
    assert response.json()["status"] == 1
