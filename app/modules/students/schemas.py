from pydantic import BaseModel, EmailStr
from typing import Optional
from datetime import datetime


class StudentCreate(BaseModel):
    email: EmailStr


class StudentResponse(BaseModel):
    id: str
    email: str
    created_at: Optional[datetime] = None
    last_sign_in: Optional[datetime] = None

    class Config:
        from_attributes = True


class StudentCreateResponse(StudentResponse):
    temporary_password: str
    message: str
