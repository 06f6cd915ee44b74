# app/users/auth_routers.py

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.connection import get_db
from app.users.auth_services import login_admin, login_doctor, login_patient
from app.users.security import TokenCodec, get_token_codec
from app.users.user_models.schemas import AdminLogin, Login, TokenResponse

logger = logging.getLogger(__name__)

# Mounted under settings.API_PATH
router = APIRouter()

# Mounted under /patient
patient_router = APIRouter()


# ============================================================
# ✅ ADMIN LOGIN
# ============================================================
@router.post("/admin/login", response_model=TokenResponse)
async def admin_login(
    credentials: AdminLogin,
    db: AsyncSession = Depends(get_db),
    codec: TokenCodec = Depends(get_token_codec),
) -> TokenResponse:
    try:
        token = await login_admin(db, codec, credentials.username, credentials.password)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Admin login failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error during admin login")
    return TokenResponse(token=token)


# ============================================================
# ✅ DOCTOR LOGIN
# ============================================================
@router.post("/doctor/login", response_model=TokenResponse)
async def doctor_login(
    credentials: Login,
    db: AsyncSession = Depends(get_db),
    codec: TokenCodec = Depends(get_token_codec),
) -> TokenResponse:
    try:
        token = await login_doctor(db, codec, credentials.email, credentials.password)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Doctor login failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error during doctor login")
    return TokenResponse(token=token)


# ============================================================
# ✅ PATIENT LOGIN
# ============================================================
@patient_router.post("/login", response_model=TokenResponse)
async def patient_login(
    credentials: Login,
    db: AsyncSession = Depends(get_db),
    codec: TokenCodec = Depends(get_token_codec),
) -> TokenResponse:
    try:
        token = await login_patient(db, codec, credentials.email, credentials.password)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"❌ Patient login failed: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail="Internal server error during patient login")
    return TokenResponse(token=token)
