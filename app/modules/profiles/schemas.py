from pydantic import BaseModel, Field
from typing import Optional, Literal
from datetime import datetime


class ProfileResponse(BaseModel):
    id: str
    email: str
    role: Literal["student", "teacher"]
    display_name: str
    created_at: datetime
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProfileUpdate(BaseModel):
    display_name: str


class PasswordChangeRequest(BaseModel):
    current_password: str = ""
    new_password: str = ""
    confirm_password: str = ""


class MessageResponse(BaseModel):
    message: str = Field(default="OK")
