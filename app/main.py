# app/main.py
from dotenv import load_dotenv

load_dotenv()

import logging
import logging.config
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config.appconfig import settings

# Apply logging configuration
logging.config.dictConfig(settings.LOGGING_CONFIG)

logger = logging.getLogger("app.main")

# Import routers
from app.database.connection import AsyncSessionLocal, init_models
from app.system_services.appointment_routes import router as appointment_router
from app.system_services.dashboard_routes import router as dashboard_router
from app.system_services.doctor_routes import router as doctor_router
from app.system_services.patient_routes import router as patient_router
from app.system_services.prescription_routes import router as prescription_router
from app.users.auth_routers import patient_router as patient_auth_router
from app.users.auth_routers import router as auth_router
from app.users.auth_services import ensure_admin


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    await init_models()
    async with AsyncSessionLocal() as db:
        await ensure_admin(db, settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD)
    logger.info("===============================================================================")
    logger.info(" 🚀 Starting Clinic Management Server")
    logger.info(f" ✅ Database: {settings.DATABASE_URL.split('://', 1)[0]}")
    logger.info(f" ✅ API path: {settings.API_PATH}")
    logger.info(f" ✅ Token algorithm: {settings.ALGORITHM}")
    logger.info("===============================================================================")
    yield
    # Shutdown
    logger.info("👋 Shutting down")


app = FastAPI(
    title="Clinic Management System",
    description="Doctors, patients, appointments and prescriptions",
    version="1.0.0",
    lifespan=lifespan,
)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    """Every error body is {"message": ...}, including unknown routes and 405s."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Invalid request bodies and parameters answer 422 with a readable message."""
    problems = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = str(error.get("msg", "Invalid value")).removeprefix("Value error, ")
        problems.append(f"{field}: {message}" if field else message)
    logger.warning(f"⚠️ Validation error for {request.url.path}: {problems}")
    return JSONResponse(status_code=422, content={"message": "; ".join(problems)})


# Include routers with prefixes
app.include_router(auth_router, prefix=settings.API_PATH, tags=["Authentication"])
app.include_router(patient_auth_router, prefix="/patient", tags=["Authentication"])
app.include_router(doctor_router, prefix=f"{settings.API_PATH}/doctor", tags=["Doctors"])
app.include_router(prescription_router, prefix=f"{settings.API_PATH}/prescription", tags=["Prescriptions"])
app.include_router(appointment_router, prefix="/appointments", tags=["Appointments"])
app.include_router(patient_router, prefix="/patient", tags=["Patients"])
app.include_router(dashboard_router, tags=["Dashboards"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=8000, reload=True)
