# config/appconfig.py
"""
Application Configuration
Secrets, database and logging settings for the clinic backend
"""
from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Literal, Optional
from pathlib import Path

# Calculate the project root
BASE_DIR = Path(__file__).resolve().parent.parent


class AppSettings(BaseSettings):
    """Configuration for the Clinic Management Backend"""

    # ============================================================================
    # TOKEN SIGNING
    # ============================================================================
    SECRET_KEY: str = Field(default="dev-secret-change-me-please-32bytes", min_length=16)
    ALGORITHM: Literal["HS256", "HS384", "HS512"] = "HS256"

    # ============================================================================
    # DATABASE
    # ============================================================================
    DATABASE_URL: str = f"sqlite+aiosqlite:///{BASE_DIR / 'clinic.db'}"
    DATABASE_ECHO: bool = False

    # ============================================================================
    # HTTP
    # ============================================================================
    API_PATH: str = "/api"           # Prefix for admin, doctor and prescription routes

    # ============================================================================
    # BOOTSTRAP ADMIN (created at startup when both are set)
    # ============================================================================
    ADMIN_USERNAME: Optional[str] = None
    ADMIN_PASSWORD: Optional[str] = None

    # ============================================================================
    # LOGGING
    # ============================================================================
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    class Config:
        env_file = ".env"
        extra = "ignore"

    # ========================================================================
    # COMPUTED PROPERTIES
    # ========================================================================
    @property
    def LOGGING_CONFIG(self) -> dict:
        """dictConfig payload: one console handler, level from LOG_LEVEL."""
        return {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                },
            },
            "loggers": {
                "app": {"handlers": ["console"], "level": self.LOG_LEVEL, "propagate": False},
                "sqlalchemy.engine": {"level": "WARNING"},
            },
            "root": {"handlers": ["console"], "level": "WARNING"},
        }


settings = AppSettings()
