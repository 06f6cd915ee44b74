# app/system_models/prescription_model/prescription_model.py
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from app.database.connection import Base
from app.helpers.time import utcnow


class Prescription(Base):
    __tablename__ = "prescriptions"

    id = Column(Integer, primary_key=True)
    appointment_id = Column(
        Integer, ForeignKey("appointments.id", ondelete="CASCADE"), unique=True, nullable=False
    )

    patient_name = Column(String(100), nullable=False)
    medication = Column(String(100), nullable=False)
    dosage = Column(String, nullable=False)
    doctor_notes = Column(String(200))

    prescribed_at = Column(DateTime(timezone=True), default=utcnow)

    appointment = relationship("Appointment", back_populates="prescription")
