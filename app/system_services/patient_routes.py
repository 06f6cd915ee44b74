# app/system_services/patient_routes.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.connection import get_db
from app.system_models.appointment_model.appointment_schemas import AppointmentList, AppointmentResponse
from app.system_models.patient_model.patient_schemas import PatientCreate, PatientResponse
from app.system_services.patient_service import (
    create_patient,
    filter_patient_appointments,
    get_patient_appointments,
    get_patient_details,
)
from app.users.auth_dependencies import get_current_patient, require_path_role

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=PatientResponse, status_code=status.HTTP_201_CREATED)
async def register_patient_endpoint(patient: PatientCreate, db: AsyncSession = Depends(get_db)):
    """Register a new patient."""
    try:
        return await create_patient(db, patient)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Registering patient failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to register patient")


@router.get("", response_model=PatientResponse)
async def patient_details_endpoint(
    patient_email: str = Depends(get_current_patient),
    db: AsyncSession = Depends(get_db),
):
    """Details of the calling patient."""
    return await get_patient_details(db, patient_email)


@router.get("/filter", response_model=AppointmentList)
async def filter_patient_appointments_endpoint(
    condition: Optional[str] = None,
    name: Optional[str] = None,
    patient_email: str = Depends(get_current_patient),
    db: AsyncSession = Depends(get_db),
):
    """The calling patient's appointments, by condition (future/past) and doctor name."""
    try:
        appointments = await filter_patient_appointments(db, patient_email, condition, name)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Filtering patient appointments failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to filter appointments")
    return AppointmentList(appointments=[AppointmentResponse.from_entity(a) for a in appointments])


@router.get("/{patient_id}/appointments/{user}", response_model=AppointmentList)
async def patient_appointments_endpoint(
    patient_id: int,
    _subject: str = Depends(require_path_role),
    db: AsyncSession = Depends(get_db),
):
    """Appointments of a patient, for a token valid for the role named in the path."""
    try:
        appointments = await get_patient_appointments(db, patient_id)
    except Exception as e:
        logger.error(f"❌ Fetching appointments of patient {patient_id} failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch appointments")
    return AppointmentList(appointments=[AppointmentResponse.from_entity(a) for a in appointments])
