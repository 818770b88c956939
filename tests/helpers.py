from datetime import date, datetime, time

from httpx import AsyncClient

ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "admin-pass"
DOCTOR_PASSWORD = "doctor-pass"
PATIENT_PASSWORD = "patient-pass"

def at(day: date, hhmm: str) -> datetime:
    hour, minute = hhmm.split(":")
    return datetime.combine(day, time(int(hour), int(minute)))

async def login(client: AsyncClient, role: str, identifier: str, password: str) -> dict:
    if role == "admin":
        payload = {"username": identifier, "password": password}
    else:
        payload = {"identifier": identifier, "password": password}
    response = await client.post(f"/api/v1/auth/{role}/login", json=payload)
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
