# app/system_services/doctor_service.py
import logging
from datetime import date as date_type, datetime, time, timedelta
from typing import List, Optional, Union

from fastapi import HTTPException, status
from sqlalchemy import delete, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.system_models.appointment_model.appointment_model import Appointment
from app.system_models.doctor_model.doctor_model import Doctor
from app.system_models.doctor_model.doctor_schemas import DoctorCreate, DoctorUpdate
from app.system_models.prescription_model.prescription_model import Prescription
from app.helpers.time import parse_day, slot_key
from app.users.security import get_password_hash

logger = logging.getLogger(__name__)

NOON = time(12, 0)


# ============================================================
# ✅ DOCTOR AVAILABILITY
# ============================================================
async def get_doctor_availability(
    db: AsyncSession, doctor_id: int, day: Union[str, date_type]
) -> List[str]:
    """
    Open start times for a doctor on a day.

    The doctor's configured slots minus the time-of-day of every appointment
    starting in [day 00:00, day+1 00:00), in configured order. Empty when the
    doctor does not exist or the lookup fails.
    """
    try:
        start = datetime.combine(parse_day(day), time.min)
        end = start + timedelta(days=1)

        doctor = await db.get(Doctor, doctor_id)
        if doctor is None:
            return []

        result = await db.execute(
            select(Appointment.appointment_time).where(
                Appointment.doctor_id == doctor_id,
                Appointment.appointment_time >= start,
                Appointment.appointment_time < end,
            )
        )
        booked = {booked_at.strftime("%H:%M") for booked_at in result.scalars().all()}

        return [slot for slot in (doctor.available_times or []) if slot_key(slot) not in booked]
    except Exception as e:
        logger.error(f"❌ Availability lookup failed for doctor {doctor_id} on {day}: {e}", exc_info=True)
        return []


# ============================================================
# ✅ REGISTER A DOCTOR
# ============================================================
async def save_doctor(db: AsyncSession, doctor_data: DoctorCreate) -> Doctor:
    result = await db.execute(
        select(Doctor).where(or_(Doctor.email == doctor_data.email, Doctor.phone == doctor_data.phone))
    )
    if result.scalars().first():
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Doctor already exists",
        )

    values = doctor_data.model_dump()
    values["password"] = get_password_hash(values["password"])
    db_doctor = Doctor(**values)
    db.add(db_doctor)
    await db.commit()
    await db.refresh(db_doctor)
    logger.info(f"Registered doctor {db_doctor.id} ({db_doctor.email})")
    return db_doctor


# ============================================================
# ✅ UPDATE A DOCTOR
# ============================================================
async def update_doctor(db: AsyncSession, doctor_data: DoctorUpdate) -> Doctor:
    db_doctor = await db.get(Doctor, doctor_data.id)
    if db_doctor is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Doctor not found")

    changes = doctor_data.model_dump(exclude_unset=True, exclude={"id"})

    clashes = [
        getattr(Doctor, field) == changes[field] for field in ("email", "phone") if changes.get(field)
    ]
    if clashes:
        result = await db.execute(select(Doctor.id).where(Doctor.id != db_doctor.id, or_(*clashes)))
        if result.scalars().first() is not None:
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Doctor already exists",
            )

    if changes.get("password"):
        changes["password"] = get_password_hash(changes["password"])
    for field, value in changes.items():
        if value is not None:
            setattr(db_doctor, field, value)

    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Another doctor already uses this email",
        )
    await db.refresh(db_doctor)
    return db_doctor


# ============================================================
# ✅ LIST / DELETE DOCTORS
# ============================================================
async def get_doctors(db: AsyncSession) -> List[Doctor]:
    result = await db.execute(select(Doctor).order_by(Doctor.id))
    return list(result.scalars().all())


async def delete_doctor(db: AsyncSession, doctor_id: int) -> None:
    db_doctor = await db.get(Doctor, doctor_id)
    if db_doctor is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Doctor not found")

    doctor_appointments = select(Appointment.id).where(Appointment.doctor_id == doctor_id)
    await db.execute(delete(Prescription).where(Prescription.appointment_id.in_(doctor_appointments)))
    await db.execute(delete(Appointment).where(Appointment.doctor_id == doctor_id))
    await db.delete(db_doctor)
    await db.commit()
    logger.info(f"Deleted doctor {doctor_id} and their appointments")


# ============================================================
# ✅ FILTER DOCTORS
# ============================================================
def is_in_time_period(slot: str, period: Optional[str]) -> bool:
    """AM = before noon, PM = noon or later; any other period matches."""
    if not period:
        return True
    slot_time = time.fromisoformat(slot_key(slot))
    period = period.strip().upper()
    if period == "AM":
        return slot_time < NOON
    if period == "PM":
        return slot_time >= NOON
    return True


def filter_doctor_by_time(doctors: List[Doctor], period: Optional[str]) -> List[Doctor]:
    if not period:
        return doctors
    return [
        doctor
        for doctor in doctors
        if any(is_in_time_period(slot, period) for slot in (doctor.available_times or []))
    ]


async def filter_doctors(
    db: AsyncSession,
    name: Optional[str] = None,
    specialty: Optional[str] = None,
    period: Optional[str] = None,
) -> List[Doctor]:
    """Any combination of name substring, specialty and AM/PM period; none -> all doctors."""
    query = select(Doctor).order_by(Doctor.id)
    if name:
        query = query.where(Doctor.name.ilike(f"%{name.strip()}%"))
    if specialty:
        query = query.where(func.lower(Doctor.specialty) == specialty.strip().lower())

    result = await db.execute(query)
    return filter_doctor_by_time(list(result.scalars().all()), period)
