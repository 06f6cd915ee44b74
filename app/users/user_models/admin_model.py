# app/users/user_models/admin_model.py
from sqlalchemy import Column, Integer, String
from app.database.connection import Base


class Admin(Base):
    __tablename__ = "admins"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)

    def __repr__(self):
        return f"<Admin(id={self.id}, username='{self.username}')>"
