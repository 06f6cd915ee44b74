# app/system_models/appointment_model/appointment_schemas.py
from typing import Optional, List, Literal
from datetime import date, datetime, time
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.helpers.time import is_future


def _require_future(v):
    if v is not None and not is_future(v):
        raise ValueError("Appointment time must be in the future")
    return v


class AppointmentCreate(BaseModel):
    doctor_id: int
    appointment_time: datetime

    @field_validator("appointment_time")
    def appointment_time_in_future(cls, v):
        return _require_future(v)

    @property
    def date_str(self) -> str:
        return self.appointment_time.date().isoformat()

    @property
    def time_str(self) -> str:
        return self.appointment_time.strftime("%H:%M")


class AppointmentUpdate(BaseModel):
    id: int
    appointment_time: Optional[datetime] = None
    status: Optional[Literal[0, 1]] = None

    @field_validator("appointment_time")
    def appointment_time_in_future(cls, v):
        return _require_future(v)


class AppointmentResponse(BaseModel):
    id: int
    doctor_id: int
    doctor_name: Optional[str] = None
    patient_id: int
    patient_name: Optional[str] = None
    patient_email: Optional[str] = None
    patient_phone: Optional[str] = None
    patient_address: Optional[str] = None
    appointment_time: datetime
    appointment_date: date
    appointment_time_only: time
    end_time: datetime
    status: int = Field(..., description="0 = scheduled, 1 = completed")
    model_config = ConfigDict(from_attributes=True)

    @classmethod
    def from_entity(cls, appointment) -> "AppointmentResponse":
        """Flatten an Appointment with its loaded doctor and patient."""
        doctor = appointment.doctor
        patient = appointment.patient
        return cls(
            id=appointment.id,
            doctor_id=appointment.doctor_id,
            doctor_name=doctor.name if doctor else None,
            patient_id=appointment.patient_id,
            patient_name=patient.name if patient else None,
            patient_email=patient.email if patient else None,
            patient_phone=patient.phone if patient else None,
            patient_address=patient.address if patient else None,
            appointment_time=appointment.appointment_time,
            appointment_date=appointment.appointment_date,
            appointment_time_only=appointment.appointment_time_only,
            end_time=appointment.end_time,
            status=appointment.status,
        )


class AppointmentList(BaseModel):
    appointments: List[AppointmentResponse]
