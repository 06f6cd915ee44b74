# app/system_models/prescription_model/prescription_schemas.py
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class PrescriptionBase(BaseModel):
    appointment_id: int
    patient_name: str = Field(..., min_length=3, max_length=100)
    medication: str = Field(..., min_length=3, max_length=100)
    dosage: str
    doctor_notes: Optional[str] = Field(None, max_length=200)


class PrescriptionCreate(PrescriptionBase):
    pass


class PrescriptionResponse(PrescriptionBase):
    id: int
    prescribed_at: datetime
    model_config = ConfigDict(from_attributes=True)
