# app/system_services/doctor_routes.py
import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.connection import get_db
from app.system_models.doctor_model.doctor_schemas import (
    DoctorAvailabilityResponse,
    DoctorCreate,
    DoctorList,
    DoctorResponse,
    DoctorUpdate,
)
from app.system_services.doctor_service import (
    delete_doctor,
    filter_doctors,
    get_doctor_availability,
    get_doctors,
    save_doctor,
    update_doctor,
)
from app.helpers.time import parse_day
from app.users.auth_dependencies import get_current_admin, require_path_role
from app.users.user_models.schemas import MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/availability/{user}/{doctor_id}/{date}", response_model=DoctorAvailabilityResponse)
async def doctor_availability_endpoint(
    doctor_id: int,
    date: str,
    _subject: str = Depends(require_path_role),
    db: AsyncSession = Depends(get_db),
):
    """Open slots of a doctor on a date, for any role named in the path."""
    try:
        day = parse_day(date)
    except ValueError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid date, expected YYYY-MM-DD")
    availability = await get_doctor_availability(db, doctor_id, day)
    return DoctorAvailabilityResponse(doctor_id=doctor_id, date=day.isoformat(), availability=availability)


@router.get("", response_model=DoctorList)
async def list_doctors_endpoint(db: AsyncSession = Depends(get_db)):
    """List every doctor."""
    try:
        doctors = await get_doctors(db)
    except Exception as e:
        logger.error(f"❌ Listing doctors failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to fetch doctors")
    return DoctorList(doctors=doctors)


@router.get("/filter", response_model=DoctorList)
async def filter_doctors_endpoint(
    name: Optional[str] = None,
    time: Optional[str] = None,
    specialty: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    """Filter doctors by name, AM/PM availability and specialty."""
    try:
        doctors = await filter_doctors(db, name=name, specialty=specialty, period=time)
    except Exception as e:
        logger.error(f"❌ Filtering doctors failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to filter doctors")
    return DoctorList(doctors=doctors)


@router.post("", response_model=DoctorResponse, status_code=status.HTTP_201_CREATED)
async def register_doctor_endpoint(
    doctor: DoctorCreate,
    _admin: str = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    """Register a new doctor (admin only)."""
    try:
        return await save_doctor(db, doctor)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Registering doctor failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to register doctor")


@router.put("", response_model=DoctorResponse)
async def update_doctor_endpoint(
    doctor: DoctorUpdate,
    _admin: str = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    """Update a doctor's profile or schedule (admin only)."""
    try:
        return await update_doctor(db, doctor)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Updating doctor failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to update doctor")


@router.delete("/{doctor_id}", response_model=MessageResponse)
async def delete_doctor_endpoint(
    doctor_id: int,
    _admin: str = Depends(get_current_admin),
    db: AsyncSession = Depends(get_db),
):
    """Delete a doctor and all of their appointments (admin only)."""
    try:
        await delete_doctor(db, doctor_id)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Deleting doctor {doctor_id} failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Failed to delete doctor")
    return MessageResponse(message="Doctor deleted successfully")
