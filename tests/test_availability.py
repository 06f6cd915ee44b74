"""Test slot availability and the appointment admission check."""
from unittest.mock import AsyncMock

import pytest

from app.system_models.appointment_model.appointment_model import Appointment
from app.system_services.appointment_service import AdmissionResult, validate_appointment
from app.helpers.time import slot_key
from app.system_services.doctor_service import get_doctor_availability
from tests_support import BOOKING_DAY, DAY, NEXT_DAY, PREV_DAY, at


async def test_booked_slot_is_removed(db, doctor, booked):
    """Configured 09/10/11 with 10:00 booked leaves 09:00 and 11:00."""
    assert await get_doctor_availability(db, doctor.id, DAY) == ["09:00", "11:00"]


async def test_availability_accepts_date_objects(db, doctor, booked):
    assert await get_doctor_availability(db, doctor.id, BOOKING_DAY) == ["09:00", "11:00"]


async def test_other_days_are_unaffected(db, doctor, booked):
    assert await get_doctor_availability(db, doctor.id, NEXT_DAY) == ["09:00", "10:00", "11:00"]
    assert await get_doctor_availability(db, doctor.id, PREV_DAY) == ["09:00", "10:00", "11:00"]


async def test_unknown_doctor_has_no_availability(db):
    assert await get_doctor_availability(db, 999, DAY) == []


async def test_invalid_date_yields_no_availability(db, doctor):
    assert await get_doctor_availability(db, doctor.id, "June first") == []


async def test_availability_is_idempotent(db, doctor, booked):
    first = await get_doctor_availability(db, doctor.id, DAY)
    second = await get_doctor_availability(db, doctor.id, DAY)

    assert first == second


async def test_configured_order_is_preserved(db, doctor, patient):
    doctor.available_times = ["16:00", "08:30", "12:00"]
    db.add(Appointment(doctor_id=doctor.id, patient_id=patient.id, appointment_time=at(8, 30)))
    await db.commit()

    assert await get_doctor_availability(db, doctor.id, DAY) == ["16:00", "12:00"]


async def test_other_doctors_bookings_do_not_count(db, doctor, afternoon_doctor, patient):
    db.add(
        Appointment(
            doctor_id=afternoon_doctor.id, patient_id=patient.id, appointment_time=at(9)
        )
    )
    await db.commit()

    assert await get_doctor_availability(db, doctor.id, DAY) == ["09:00", "10:00", "11:00"]


async def test_admission_rejects_taken_slot(db, doctor, booked):
    assert await validate_appointment(db, doctor.id, DAY, "10:00") == AdmissionResult.SLOT_UNAVAILABLE
    assert AdmissionResult.SLOT_UNAVAILABLE == 0


async def test_admission_accepts_open_slot(db, doctor, booked):
    assert await validate_appointment(db, doctor.id, DAY, "09:00") == AdmissionResult.ADMITTED
    assert AdmissionResult.ADMITTED == 1


async def test_admission_rejects_unknown_doctor(db, doctor):
    assert await validate_appointment(db, 999, DAY, "09:00") == AdmissionResult.DOCTOR_NOT_FOUND
    assert AdmissionResult.DOCTOR_NOT_FOUND == -1


async def test_admission_rejects_unconfigured_time(db, doctor):
    assert await validate_appointment(db, doctor.id, DAY, "09:30") == AdmissionResult.SLOT_UNAVAILABLE


async def test_admission_normalizes_time_format(db, doctor):
    assert await validate_appointment(db, doctor.id, DAY, "9:00") == AdmissionResult.ADMITTED
    assert await validate_appointment(db, doctor.id, DAY, "11:00:00") == AdmissionResult.ADMITTED


async def test_admission_fails_closed_on_store_error():
    """An internal fault rejects the booking instead of raising."""
    broken_db = AsyncMock()
    broken_db.get.side_effect = RuntimeError("connection reset")

    assert await validate_appointment(broken_db, 1, DAY, "09:00") == AdmissionResult.SLOT_UNAVAILABLE


@pytest.mark.parametrize(
    "raw, expected",
    [("9:00", "09:00"), ("09:00", "09:00"), ("14:30:00", "14:30")],
)
def test_slot_key(raw, expected):
    assert slot_key(raw) == expected
