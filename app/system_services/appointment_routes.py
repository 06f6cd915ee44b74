# app/system_services/appointment_routes.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.connection import get_db
from app.system_models.appointment_model.appointment_schemas import (
    AppointmentCreate,
    AppointmentList,
    AppointmentResponse,
    AppointmentUpdate,
)
from app.system_services.appointment_service import (
    book_appointment,
    cancel_appointment,
    get_doctor_appointments,
    update_appointment,
)
from app.users.auth_dependencies import get_current_doctor, get_current_patient
from app.users.user_models.schemas import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{date}", response_model=AppointmentList)
async def doctor_appointments_endpoint(
    date: str,
    patient_name: Optional[str] = None,
    doctor_email: str = Depends(get_current_doctor),
    db: AsyncSession = Depends(get_db),
):
    """The calling doctor's appointments on a date."""
    try:
        appointments = await get_doctor_appointments(db, doctor_email, date, patient_name)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Fetching appointments failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch appointments")
    return AppointmentList(appointments=[AppointmentResponse.from_entity(a) for a in appointments])


@router.post("", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
async def book_appointment_endpoint(
    appointment: AppointmentCreate,
    patient_email: str = Depends(get_current_patient),
    db: AsyncSession = Depends(get_db),
):
    """Book an appointment for the calling patient."""
    try:
        booked = await book_appointment(db, patient_email, appointment)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Booking failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to book appointment")
    return AppointmentResponse.from_entity(booked)


@router.put("", response_model=AppointmentResponse)
async def update_appointment_endpoint(
    appointment: AppointmentUpdate,
    patient_email: str = Depends(get_current_patient),
    db: AsyncSession = Depends(get_db),
):
    """Move or update one of the calling patient's appointments."""
    try:
        updated = await update_appointment(db, patient_email, appointment)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Updating appointment {appointment.id} failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update appointment")
    return AppointmentResponse.from_entity(updated)


@router.delete("/{appointment_id}", response_model=MessageResponse)
async def cancel_appointment_endpoint(
    appointment_id: int,
    patient_email: str = Depends(get_current_patient),
    db: AsyncSession = Depends(get_db),
):
    """Cancel (delete) one of the calling patient's appointments."""
    try:
        await cancel_appointment(db, patient_email, appointment_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Cancelling appointment {appointment_id} failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to cancel appointment")
    return MessageResponse(message="Appointment canceled successfully")
