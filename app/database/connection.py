# app/database/connection.py
import logging
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from config.appconfig import settings

logger = logging.getLogger(__name__)

engine = create_async_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)

AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

Base = declarative_base()


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with AsyncSessionLocal() as session:
        yield session


async def init_models() -> None:
    """Create all tables registered on Base."""
    # Model modules must be imported so their tables are registered
    import app.users.user_models.admin_model  # noqa: F401
    import app.system_models.doctor_model.doctor_model  # noqa: F401
    import app.system_models.patient_model.patient_model  # noqa: F401
    import app.system_models.appointment_model.appointment_model  # noqa: F401
    import app.system_models.prescription_model.prescription_model  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("✅ Database tables ready")
