# app/system_models/patient_model/patient_schemas.py
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class PatientBase(BaseModel):
    name: str = Field(..., min_length=3, max_length=100)
    email: EmailStr
    phone: str = Field(..., pattern=r"^\d{10}$")
    address: str = Field(..., max_length=255)

    @field_validator("email", mode="before")
    def normalize_email(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v


class PatientCreate(PatientBase):
    password: str = Field(..., min_length=6)


class PatientResponse(PatientBase):
    id: int
    email: str
    model_config = ConfigDict(from_attributes=True)
