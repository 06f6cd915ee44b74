# app/system_services/prescription_routes.py
import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.connection import get_db
from app.system_models.prescription_model.prescription_schemas import PrescriptionCreate, PrescriptionResponse
from app.system_services.prescription_service import get_prescription, save_prescription
from app.users.auth_dependencies import get_current_doctor

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=PrescriptionResponse, status_code=status.HTTP_201_CREATED)
async def save_prescription_endpoint(
    prescription: PrescriptionCreate,
    _doctor: str = Depends(get_current_doctor),
    db: AsyncSession = Depends(get_db),
):
    """Save a prescription and complete its appointment."""
    try:
        return await save_prescription(db, prescription)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Saving prescription failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error occurred while saving prescription")


@router.get("/{appointment_id}", response_model=PrescriptionResponse)
async def get_prescription_endpoint(
    appointment_id: int,
    _doctor: str = Depends(get_current_doctor),
    db: AsyncSession = Depends(get_db),
):
    """Prescription of an appointment."""
    try:
        return await get_prescription(db, appointment_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Fetching prescription failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Error occurred while fetching prescription")
