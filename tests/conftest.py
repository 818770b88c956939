from datetime import date, timedelta

import fakeredis
import fakeredis.aioredis
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

from smartclinic.core.redis import redis_client
from smartclinic.core.security import get_password_hash
from smartclinic.db.models import Doctor, Patient
from smartclinic.db.session import get_session, seed_admin
from smartclinic.main import app
from tests.helpers import ADMIN_PASSWORD, ADMIN_USERNAME, DOCTOR_PASSWORD, PATIENT_PASSWORD, login

@pytest.fixture
def booking_day() -> date:
    """A day far enough ahead that every slot on it is in the future."""
    return date.today() + timedelta(days=30)

@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'clinic.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()

@pytest.fixture
def session_maker(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

@pytest_asyncio.fixture
async def session(session_maker):
    async with session_maker() as session:
        yield session

@pytest.fixture(autouse=True)
def fake_redis(monkeypatch):
    fake = fakeredis.aioredis.FakeRedis(server=fakeredis.FakeServer(), decode_responses=True)
    monkeypatch.setattr(redis_client, "redis", fake)
    return fake

@pytest_asyncio.fixture
async def client(session_maker):
    async def override_get_session():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()

async def _add(session, obj):
    session.add(obj)
    await session.commit()
    await session.refresh(obj)
    return obj

@pytest_asyncio.fixture
async def admin(session):
    return await seed_admin(session, ADMIN_USERNAME, ADMIN_PASSWORD)

@pytest_asyncio.fixture
async def doctor(session) -> Doctor:
    return await _add(session, Doctor(
        name="Dr. A",
        specialty="Cardiology",
        email="dr.a@clinic.test",
        phone="555-000-0001",
        password_hash=get_password_hash(DOCTOR_PASSWORD),
        available_times=["09:00 - 10:00", "10:00 - 11:00"],
    ))

@pytest_asyncio.fixture
async def other_doctor(session) -> Doctor:
    return await _add(session, Doctor(
        name="Dr. Brown",
        specialty="Dermatology",
        email="brown@clinic.test",
        phone="555-000-0002",
        password_hash=get_password_hash(DOCTOR_PASSWORD),
        available_times=["14:00 - 15:00", "15:00 - 16:00"],
    ))

@pytest_asyncio.fixture
async def patient(session) -> Patient:
    return await _add(session, Patient(
        name="Patient One",
        email="p1@mail.test",
        phone="555-100-0001",
        address="1 Main St",
        password_hash=get_password_hash(PATIENT_PASSWORD),
    ))

@pytest_asyncio.fixture
async def other_patient(session) -> Patient:
    return await _add(session, Patient(
        name="Patient Two",
        email="p2@mail.test",
        phone="555-100-0002",
        password_hash=get_password_hash(PATIENT_PASSWORD),
    ))

@pytest_asyncio.fixture
async def admin_headers(client, admin):
    return await login(client, "admin", ADMIN_USERNAME, ADMIN_PASSWORD)

@pytest_asyncio.fixture
async def doctor_headers(client, doctor):
    return await login(client, "doctor", doctor.email, DOCTOR_PASSWORD)

@pytest_asyncio.fixture
async def patient_headers(client, patient):
    return await login(client, "patient", patient.email, PATIENT_PASSWORD)

@pytest_asyncio.fixture
async def other_patient_headers(client, other_patient):
    return await login(client, "patient", other_patient.email, PATIENT_PASSWORD)
