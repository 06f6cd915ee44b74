# app/system_services/prescription_service.py
import logging

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.system_models.appointment_model.appointment_model import Appointment, COMPLETED
from app.system_models.prescription_model.prescription_model import Prescription
from app.system_models.prescription_model.prescription_schemas import PrescriptionCreate

logger = logging.getLogger(__name__)

DUPLICATE_MESSAGE = "Prescription already exists for this appointment"


async def get_prescription(db: AsyncSession, appointment_id: int) -> Prescription:
    result = await db.execute(select(Prescription).where(Prescription.appointment_id == appointment_id))
    prescription = result.scalars().first()
    if prescription is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Prescription not found for appointment ID: {appointment_id}",
        )
    return prescription


async def save_prescription(db: AsyncSession, prescription: PrescriptionCreate) -> Prescription:
    """Save a prescription and mark its appointment completed, in one commit."""
    appointment = await db.get(Appointment, prescription.appointment_id)
    if appointment is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Appointment not found")

    existing = await db.execute(
        select(Prescription.id).where(Prescription.appointment_id == prescription.appointment_id)
    )
    if existing.first() is not None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=DUPLICATE_MESSAGE)

    db_prescription = Prescription(**prescription.model_dump())
    db.add(db_prescription)
    appointment.status = COMPLETED

    # Unique appointment_id catches a concurrent save that passed the pre-check
    try:
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=DUPLICATE_MESSAGE)

    await db.refresh(db_prescription)
    logger.info(f"Saved prescription {db_prescription.id} for appointment {prescription.appointment_id}")
    return db_prescription
