# app/users/user_models/schemas.py

from pydantic import BaseModel, EmailStr, field_validator


# ✅ Admin login request
class AdminLogin(BaseModel):
    username: str
    password: str


# ✅ Doctor / patient login request
class Login(BaseModel):
    email: EmailStr
    password: str

    @field_validator("email", mode="before")
    def normalize_email(cls, v):
        # sourcery skip: assign-if-exp, reintroduce-else
        if isinstance(v, str):
            return v.strip().lower()
        return v


# ✅ Response schema for any login
class TokenResponse(BaseModel):
    token: str
    token_type: str = "bearer"


# ✅ Generic message body
class MessageResponse(BaseModel):
    message: str
