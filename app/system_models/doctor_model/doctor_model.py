# app/system_models/doctor_model/doctor_model.py
from sqlalchemy import Column, Integer, String, JSON
from sqlalchemy.orm import relationship
from app.database.connection import Base


class Doctor(Base):
    __tablename__ = "doctors"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False, index=True)
    specialty = Column(String(50), nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)
    phone = Column(String(10), nullable=False)

    # Ordered "HH:MM" start times the doctor accepts bookings at
    available_times = Column(JSON, nullable=False, default=list)

    appointments = relationship("Appointment", back_populates="doctor", passive_deletes=True)

    def __repr__(self):
        return f"<Doctor {self.id}: {self.name} ({self.specialty})>"
