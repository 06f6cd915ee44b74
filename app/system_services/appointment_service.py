# app/system_services/appointment_service.py
import enum
import logging
from datetime import date as date_type, datetime, time, timedelta
from typing import List, Optional, Union

from fastapi import HTTPException, status
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.system_models.appointment_model.appointment_model import Appointment, SCHEDULED
from app.system_models.appointment_model.appointment_schemas import AppointmentCreate, AppointmentUpdate
from app.system_models.doctor_model.doctor_model import Doctor
from app.system_models.patient_model.patient_model import Patient
from app.system_models.prescription_model.prescription_model import Prescription
from app.helpers.time import parse_day, slot_key
from app.system_services.doctor_service import get_doctor_availability

logger = logging.getLogger(__name__)


class AdmissionResult(enum.IntEnum):
    """Outcome of checking a proposed booking."""

    DOCTOR_NOT_FOUND = -1
    SLOT_UNAVAILABLE = 0
    ADMITTED = 1


# ============================================================
# ✅ ADMISSION CHECK
# ============================================================
async def validate_appointment(
    db: AsyncSession,
    doctor_id: int,
    day: Union[str, date_type],
    start: Union[str, time],
) -> AdmissionResult:
    """
    DOCTOR_NOT_FOUND if the doctor does not exist, ADMITTED if `start` is one
    of the doctor's open slots on `day`, SLOT_UNAVAILABLE otherwise.
    Internal faults are logged and count as SLOT_UNAVAILABLE.
    """
    try:
        if await db.get(Doctor, doctor_id) is None:
            return AdmissionResult.DOCTOR_NOT_FOUND

        requested = slot_key(start)
        available = await get_doctor_availability(db, doctor_id, day)
        if any(slot_key(slot) == requested for slot in available):
            return AdmissionResult.ADMITTED
        return AdmissionResult.SLOT_UNAVAILABLE
    except Exception as e:
        logger.error(f"❌ Admission check failed for doctor {doctor_id} at {day} {start}: {e}", exc_info=True)
        return AdmissionResult.SLOT_UNAVAILABLE


def raise_for_admission(result: AdmissionResult) -> None:
    if result == AdmissionResult.DOCTOR_NOT_FOUND:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid doctor ID")
    if result == AdmissionResult.SLOT_UNAVAILABLE:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Appointment slot already taken")


async def _commit_booking(db: AsyncSession) -> None:
    # Two requests can pass the admission check together; the unique
    # (doctor_id, appointment_time) constraint lets only one of them in.
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail="Appointment slot already taken")


async def get_patient_by_email(db: AsyncSession, email: str) -> Patient:
    result = await db.execute(select(Patient).where(Patient.email == email))
    patient = result.scalars().first()
    if patient is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Patient not found")
    return patient


async def get_appointment(db: AsyncSession, appointment_id: int) -> Optional[Appointment]:
    result = await db.execute(
        select(Appointment)
        .options(selectinload(Appointment.doctor), selectinload(Appointment.patient))
        .where(Appointment.id == appointment_id)
        .execution_options(populate_existing=True)
    )
    return result.scalars().first()


# ============================================================
# ✅ BOOK APPOINTMENT
# ============================================================
async def book_appointment(db: AsyncSession, patient_email: str, data: AppointmentCreate) -> Appointment:
    patient = await get_patient_by_email(db, patient_email)

    result = await validate_appointment(db, data.doctor_id, data.date_str, data.time_str)
    raise_for_admission(result)

    appointment = Appointment(
        doctor_id=data.doctor_id,
        patient_id=patient.id,
        appointment_time=data.appointment_time.replace(second=0, microsecond=0, tzinfo=None),
        status=SCHEDULED,
    )
    db.add(appointment)
    await _commit_booking(db)
    logger.info(f"Booked appointment {appointment.id} with doctor {data.doctor_id} at {appointment.appointment_time}")
    return await get_appointment(db, appointment.id)


# ============================================================
# ✅ UPDATE APPOINTMENT
# ============================================================
async def update_appointment(db: AsyncSession, patient_email: str, data: AppointmentUpdate) -> Appointment:
    patient = await get_patient_by_email(db, patient_email)
    appointment = await db.get(Appointment, data.id)
    if appointment is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Appointment not found")
    if appointment.patient_id != patient.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Unauthorized update attempt")

    if data.appointment_time is not None:
        new_time = data.appointment_time.replace(second=0, microsecond=0, tzinfo=None)
        if new_time != appointment.appointment_time:
            result = await validate_appointment(
                db, appointment.doctor_id, new_time.date(), new_time.strftime("%H:%M")
            )
            raise_for_admission(result)
            appointment.appointment_time = new_time

    if data.status is not None:
        appointment.status = data.status

    await _commit_booking(db)
    return await get_appointment(db, appointment.id)


# ============================================================
# ✅ CANCEL APPOINTMENT
# ============================================================
async def cancel_appointment(db: AsyncSession, patient_email: str, appointment_id: int) -> None:
    patient = await get_patient_by_email(db, patient_email)
    appointment = await db.get(Appointment, appointment_id)
    if appointment is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Appointment not found")
    if appointment.patient_id != patient.id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Unauthorized cancel attempt")

    # Cancellation removes the booking outright
    await db.execute(delete(Prescription).where(Prescription.appointment_id == appointment_id))
    await db.delete(appointment)
    await db.commit()
    logger.info(f"Cancelled appointment {appointment_id}")


# ============================================================
# ✅ DOCTOR'S APPOINTMENTS FOR A DAY
# ============================================================
async def get_doctor_appointments(
    db: AsyncSession,
    doctor_email: str,
    day: Union[str, date_type],
    patient_name: Optional[str] = None,
) -> List[Appointment]:
    result = await db.execute(select(Doctor).where(Doctor.email == doctor_email))
    doctor = result.scalars().first()
    if doctor is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Doctor not found")

    try:
        start = datetime.combine(parse_day(day), time.min)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid date, expected YYYY-MM-DD")

    query = (
        select(Appointment)
        .options(selectinload(Appointment.doctor), selectinload(Appointment.patient))
        .where(
            Appointment.doctor_id == doctor.id,
            Appointment.appointment_time >= start,
            Appointment.appointment_time < start + timedelta(days=1),
        )
        .order_by(Appointment.appointment_time)
    )
    if patient_name and patient_name.strip().lower() != "null":
        query = query.join(Appointment.patient).where(Patient.name.ilike(f"%{patient_name.strip()}%"))

    result = await db.execute(query)
    return list(result.scalars().all())


# ============================================================
# ✅ CHANGE STATUS
# ============================================================
async def change_status(db: AsyncSession, appointment_id: int, new_status: int) -> Appointment:
    appointment = await db.get(Appointment, appointment_id)
    if appointment is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Appointment not found")
    appointment.status = new_status
    await db.commit()
    return appointment
