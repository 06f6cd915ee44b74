# app/system_models/appointment_model/appointment_model.py
from datetime import timedelta
from sqlalchemy import Column, Integer, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from app.database.connection import Base

SCHEDULED = 0
COMPLETED = 1


class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(Integer, primary_key=True, index=True)
    doctor_id = Column(Integer, ForeignKey("doctors.id", ondelete="CASCADE"), nullable=False, index=True)
    patient_id = Column(Integer, ForeignKey("patients.id", ondelete="CASCADE"), nullable=False, index=True)

    # Clinic-local wall clock time, stored naive
    appointment_time = Column(DateTime, nullable=False)
    status = Column(Integer, nullable=False, default=SCHEDULED)

    # A doctor holds at most one appointment per start time
    __table_args__ = (
        UniqueConstraint("doctor_id", "appointment_time", name="uq_doctor_appointment_time"),
    )

    doctor = relationship("Doctor", back_populates="appointments")
    patient = relationship("Patient", back_populates="appointments")
    prescription = relationship("Prescription", back_populates="appointment", uselist=False, passive_deletes=True)

    @property
    def appointment_date(self):
        return self.appointment_time.date()

    @property
    def appointment_time_only(self):
        return self.appointment_time.time()

    @property
    def end_time(self):
        return self.appointment_time + timedelta(hours=1)

    def __repr__(self):
        return f"<Appointment {self.id}: doctor={self.doctor_id} patient={self.patient_id} at {self.appointment_time}>"
