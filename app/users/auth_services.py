import logging
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.future import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.system_models.doctor_model.doctor_model import Doctor
from app.system_models.patient_model.patient_model import Patient
from app.users.security import TokenCodec, get_password_hash, verify_password
from app.users.user_models.admin_model import Admin

logger = logging.getLogger(__name__)


def invalid_credentials(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


# ============================================================
# ✅ ADMIN LOGIN
# ============================================================
async def login_admin(db: AsyncSession, codec: TokenCodec, username: str, password: str) -> str:
    result = await db.execute(select(Admin).where(Admin.username == username))
    admin = result.scalars().first()

    if not admin:
        raise invalid_credentials("Admin not found")
    if not verify_password(password, admin.password):
        raise invalid_credentials("Invalid password")

    logger.info(f"Admin {username} logged in")
    return codec.issue(admin.username)


# ============================================================
# ✅ DOCTOR LOGIN
# ============================================================
async def login_doctor(db: AsyncSession, codec: TokenCodec, email: str, password: str) -> str:
    result = await db.execute(select(Doctor).where(Doctor.email == email))
    doctor = result.scalars().first()

    if not doctor:
        raise invalid_credentials("Doctor not found")
    if not verify_password(password, doctor.password):
        raise invalid_credentials("Invalid password")

    return codec.issue(doctor.email)


# ============================================================
# ✅ PATIENT LOGIN
# ============================================================
async def login_patient(db: AsyncSession, codec: TokenCodec, email: str, password: str) -> str:
    result = await db.execute(select(Patient).where(Patient.email == email))
    patient = result.scalars().first()

    if not patient:
        raise invalid_credentials("Patient not found")
    if not verify_password(password, patient.password):
        raise invalid_credentials("Invalid password")

    return codec.issue(patient.email)


# ============================================================
# ✅ SEED THE FIRST ADMIN
# ============================================================
async def ensure_admin(db: AsyncSession, username: Optional[str], password: Optional[str]) -> Optional[Admin]:
    """Create the configured admin account if it does not exist yet."""
    if not username or not password:
        return None

    result = await db.execute(select(Admin).where(Admin.username == username))
    admin = result.scalars().first()
    if admin:
        return admin

    admin = Admin(username=username, password=get_password_hash(password))
    db.add(admin)
    await db.commit()
    await db.refresh(admin)
    logger.info(f"✅ Created admin account '{username}'")
    return admin
