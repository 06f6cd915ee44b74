# app/users/auth_dependencies.py
# Centralized Authentication Dependencies

from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.connection import get_db
from app.users.authorizer import Authorizer, Role
from app.users.security import TokenCodec, get_token_codec

# Missing header is reported as 401 by require_role, not 403 by HTTPBearer
security_scheme = HTTPBearer(auto_error=False)

UNAUTHORIZED_MESSAGE = "Invalid or expired token"


def get_authorizer(codec: TokenCodec = Depends(get_token_codec)) -> Authorizer:
    return Authorizer(codec)


def unauthorized() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=UNAUTHORIZED_MESSAGE,
        headers={"WWW-Authenticate": "Bearer"},
    )


def bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_scheme),
) -> Optional[str]:
    return credentials.credentials if credentials else None


def require_role(role: Role):
    """
    Dependency factory: resolves to the caller's identity key
    (username for admins, email otherwise) or raises 401.
    """

    async def dependency(
        token: Optional[str] = Depends(bearer_token),
        db: AsyncSession = Depends(get_db),
        authorizer: Authorizer = Depends(get_authorizer),
    ) -> str:
        if not token:
            raise unauthorized()
        subject = await authorizer.resolve(db, token, role)
        if subject is None:
            raise unauthorized()
        return subject

    return dependency


async def require_path_role(
    user: str,
    token: Optional[str] = Depends(bearer_token),
    db: AsyncSession = Depends(get_db),
    authorizer: Authorizer = Depends(get_authorizer),
) -> str:
    """
    Same as require_role, but the role comes from the `{user}` path
    parameter of the route.
    """
    if not token:
        raise unauthorized()
    subject = await authorizer.resolve(db, token, user)
    if subject is None:
        raise unauthorized()
    return subject


get_current_admin = require_role(Role.ADMIN)
get_current_doctor = require_role(Role.DOCTOR)
get_current_patient = require_role(Role.PATIENT)
