from pydantic import BaseModel, EmailStr, Field
from typing import Optional, List, Literal
from datetime import datetime

UserRole = Literal["student", "teacher"]


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "bearer"
    user_id: str
    email: str
    role: UserRole = "student"


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6)
    role: UserRole = "student"


class RegisterResponse(BaseModel):
    user_id: str
    email: str
    role: UserRole
    message: str


class RefreshRequest(BaseModel):
    refresh_token: str


class FeatureLink(BaseModel):
    name: str
    path: str
    label: str


class MeResponse(BaseModel):
    id: str
    email: Optional[str] = None
    role: UserRole
    display_name: str
    features: List[FeatureLink]
    user_metadata: dict = {}
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
