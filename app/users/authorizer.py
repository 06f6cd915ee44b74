# app/users/authorizer.py
"""
Role authorization.
A token is accepted for a role only while its subject still exists in
that role's store, so removing a doctor invalidates the doctor's tokens.
"""
import enum
import logging
from typing import Awaitable, Callable, Dict, Optional

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.users.security import TokenCodec
from app.users.user_models.admin_model import Admin
from app.system_models.doctor_model.doctor_model import Doctor
from app.system_models.patient_model.patient_model import Patient

logger = logging.getLogger(__name__)


class Role(str, enum.Enum):
    ADMIN = "admin"
    DOCTOR = "doctor"
    PATIENT = "patient"

    @classmethod
    def parse(cls, value) -> Optional["Role"]:
        """Case-insensitive lookup; None for anything unrecognized."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        try:
            return cls(value.strip().lower())
        except ValueError:
            return None


async def admin_exists(db: AsyncSession, username: str) -> bool:
    return bool(await db.scalar(select(exists().where(Admin.username == username))))


async def doctor_exists(db: AsyncSession, email: str) -> bool:
    return bool(await db.scalar(select(exists().where(Doctor.email == email))))


async def patient_exists(db: AsyncSession, email: str) -> bool:
    return bool(await db.scalar(select(exists().where(Patient.email == email))))


ExistenceCheck = Callable[[AsyncSession, str], Awaitable[bool]]

# Each role is checked against its own store
ROLE_STORES: Dict[Role, ExistenceCheck] = {
    Role.ADMIN: admin_exists,
    Role.DOCTOR: doctor_exists,
    Role.PATIENT: patient_exists,
}


class Authorizer:
    """Validates tokens against a required role."""

    def __init__(self, codec: TokenCodec, stores: Optional[Dict[Role, ExistenceCheck]] = None):
        self.codec = codec
        self.stores = stores if stores is not None else ROLE_STORES

    async def resolve(self, db: AsyncSession, token: str, required_role) -> Optional[str]:
        """
        Return the token's subject key if it is authorized for required_role.

        Returns None for a bad token, an unknown role, a subject missing from
        the role's store, or any internal fault. Never raises.
        """
        subject = self.codec.parse_subject(token)
        if subject is None:
            return None

        role = Role.parse(required_role)
        if role is None:
            logger.warning(f"Unknown user role: {required_role!r}")
            return None

        check = self.stores.get(role)
        if check is None:
            logger.warning(f"No identity store registered for role {role.value}")
            return None

        try:
            found = await check(db, subject)
        except Exception as e:
            logger.error(f"❌ Identity store lookup failed for role {role.value}: {e}", exc_info=True)
            return None

        if not found:
            logger.info(f"Token subject not present in {role.value} store")
            return None
        return subject

    async def validate(self, db: AsyncSession, token: str, required_role) -> bool:
        return await self.resolve(db, token, required_role) is not None

    # Boundary name used by callers outside the auth package
    is_authorized = validate
