"""Shared fixtures: in-memory database, HTTP client and seeded identities."""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.main import app
from app.database.connection import Base, get_db
from app.system_models.appointment_model.appointment_model import Appointment
from app.system_models.doctor_model.doctor_model import Doctor
from app.system_models.patient_model.patient_model import Patient
from app.users.security import TokenCodec, get_password_hash, get_token_codec
from app.users.user_models.admin_model import Admin
from tests_support import PASSWORD, at

TEST_SECRET = "test-secret-for-clinic-tokens-0123456789"


@pytest.fixture
async def engine():
    """Fresh in-memory SQLite database per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
def codec():
    return TokenCodec(TEST_SECRET)


@pytest.fixture
async def client(session_factory, codec):
    """HTTP client against the app, wired to the test database and codec."""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_token_codec] = lambda: codec
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
async def admin(db):
    admin = Admin(username="root", password=get_password_hash(PASSWORD))
    db.add(admin)
    await db.commit()
    return admin


@pytest.fixture
async def doctor(db):
    doctor = Doctor(
        name="Gregory House",
        specialty="Diagnostics",
        email="house@ppth.org",
        password=get_password_hash(PASSWORD),
        phone="5550000001",
        available_times=["09:00", "10:00", "11:00"],
    )
    db.add(doctor)
    await db.commit()
    return doctor


@pytest.fixture
async def afternoon_doctor(db):
    doctor = Doctor(
        name="Lisa Cuddy",
        specialty="Endocrinology",
        email="cuddy@ppth.org",
        password=get_password_hash(PASSWORD),
        phone="5550000002",
        available_times=["13:00", "15:30"],
    )
    db.add(doctor)
    await db.commit()
    return doctor


@pytest.fixture
async def patient(db):
    patient = Patient(
        name="John Doe",
        email="john@mailbox.org",
        password=get_password_hash(PASSWORD),
        phone="5551234567",
        address="221B Baker Street",
    )
    db.add(patient)
    await db.commit()
    return patient


@pytest.fixture
async def booked(db, doctor, patient):
    """One appointment with the doctor at 10:00 on BOOKING_DAY."""
    appointment = Appointment(
        doctor_id=doctor.id,
        patient_id=patient.id,
        appointment_time=at(10),
        status=0,
    )
    db.add(appointment)
    await db.commit()
    return appointment
