# app/system_models/patient_model/patient_model.py
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from app.database.connection import Base


class Patient(Base):
    __tablename__ = "patients"

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String(100), nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)
    phone = Column(String(10), unique=True, nullable=False)
    address = Column(String(255), nullable=False)

    appointments = relationship("Appointment", back_populates="patient", passive_deletes=True)

    def __repr__(self):
        return f"<Patient {self.id}: {self.name}>"
