# app/system_models/doctor_model/doctor_schemas.py
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from app.helpers.time import slot_key


def _normalize_slots(v):
    """Render each slot as zero-padded HH:MM, refusing duplicates."""
    slots = []
    for raw in v:
        slot = slot_key(raw)
        if slot in slots:
            raise ValueError(f"Duplicate time slot: {slot}")
        slots.append(slot)
    return slots


class DoctorBase(BaseModel):
    name: str = Field(..., min_length=3, max_length=100)
    specialty: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    phone: str = Field(..., pattern=r"^\d{10}$")
    available_times: List[str] = Field(default_factory=list)

    @field_validator("email", mode="before")
    def normalize_email(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("available_times", mode="before")
    def normalize_available_times(cls, v):
        return _normalize_slots(v or [])


class DoctorCreate(DoctorBase):
    password: str = Field(..., min_length=6)


class DoctorUpdate(BaseModel):
    id: int
    name: Optional[str] = Field(None, min_length=3, max_length=100)
    specialty: Optional[str] = Field(None, min_length=3, max_length=50)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, pattern=r"^\d{10}$")
    password: Optional[str] = Field(None, min_length=6)
    available_times: Optional[List[str]] = None

    @field_validator("email", mode="before")
    def normalize_email(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    @field_validator("available_times", mode="before")
    def normalize_available_times(cls, v):
        if v is None:
            return v
        return _normalize_slots(v)


class DoctorResponse(BaseModel):
    id: int
    name: str
    specialty: str
    email: str
    phone: str
    available_times: List[str]
    model_config = ConfigDict(from_attributes=True)


class DoctorList(BaseModel):
    doctors: List[DoctorResponse]


class DoctorAvailabilityResponse(BaseModel):
    doctor_id: int
    date: str
    availability: List[str]
