# app/system_services/dashboard_routes.py
from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.connection import get_db
from app.users.auth_dependencies import get_authorizer
from app.users.authorizer import Authorizer, Role

router = APIRouter()


async def _dashboard(role: Role, token: str, db: AsyncSession, authorizer: Authorizer):
    if await authorizer.validate(db, token, role):
        return {"dashboard": role.value}
    return RedirectResponse(url="/", status_code=302)


@router.get("/adminDashboard/{token}")
async def admin_dashboard(
    token: str,
    db: AsyncSession = Depends(get_db),
    authorizer: Authorizer = Depends(get_authorizer),
):
    return await _dashboard(Role.ADMIN, token, db, authorizer)


@router.get("/doctorDashboard/{token}")
async def doctor_dashboard(
    token: str,
    db: AsyncSession = Depends(get_db),
    authorizer: Authorizer = Depends(get_authorizer),
):
    return await _dashboard(Role.DOCTOR, token, db, authorizer)
