# app/system_services/patient_service.py
import logging
from typing import List, Optional

from fastapi import HTTPException, status
from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.system_models.appointment_model.appointment_model import Appointment, COMPLETED, SCHEDULED
from app.system_models.doctor_model.doctor_model import Doctor
from app.system_models.patient_model.patient_model import Patient
from app.system_models.patient_model.patient_schemas import PatientCreate
from app.users.security import get_password_hash

logger = logging.getLogger(__name__)

# Appointment filter conditions understood by filter_patient_appointments
CONDITION_STATUS = {
    "future": SCHEDULED,
    "past": COMPLETED,
}


async def patient_exists(db: AsyncSession, email: str, phone: str) -> bool:
    """True if another patient already uses the email or phone."""
    result = await db.execute(select(Patient).where(or_(Patient.email == email, Patient.phone == phone)))
    return result.scalars().first() is not None


# ============================================================
# ✅ REGISTER A PATIENT
# ============================================================
async def create_patient(db: AsyncSession, patient: PatientCreate) -> Patient:
    if await patient_exists(db, patient.email, patient.phone):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Patient with same email or phone already exists",
        )

    values = patient.model_dump()
    values["password"] = get_password_hash(values["password"])
    db_patient = Patient(**values)
    db.add(db_patient)
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Patient with same email or phone already exists",
        )
    await db.refresh(db_patient)
    logger.info(f"Registered patient {db_patient.id}")
    return db_patient


async def get_patient_details(db: AsyncSession, email: str) -> Patient:
    result = await db.execute(select(Patient).where(Patient.email == email))
    patient = result.scalars().first()
    if patient is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Patient not found")
    return patient


def _appointments_query(patient_id: int):
    return (
        select(Appointment)
        .options(selectinload(Appointment.doctor), selectinload(Appointment.patient))
        .where(Appointment.patient_id == patient_id)
        .order_by(Appointment.appointment_time)
    )


# ============================================================
# ✅ PATIENT APPOINTMENTS
# ============================================================
async def get_patient_appointments(db: AsyncSession, patient_id: int) -> List[Appointment]:
    result = await db.execute(_appointments_query(patient_id))
    return list(result.scalars().all())


async def filter_patient_appointments(
    db: AsyncSession,
    email: str,
    condition: Optional[str] = None,
    doctor_name: Optional[str] = None,
) -> List[Appointment]:
    """
    Filter the patient's appointments by condition ("future" or "past")
    and/or a doctor name substring. An unknown condition matches nothing.
    """
    patient = await get_patient_details(db, email)
    query = _appointments_query(patient.id)

    if condition:
        status_value = CONDITION_STATUS.get(condition.strip().lower())
        if status_value is None:
            logger.warning(f"Invalid condition parameter: {condition}")
            return []
        query = query.where(Appointment.status == status_value)

    if doctor_name:
        query = query.join(Appointment.doctor).where(Doctor.name.ilike(f"%{doctor_name.strip()}%"))

    result = await db.execute(query)
    return list(result.scalars().all())
