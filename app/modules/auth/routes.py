from fastapi import APIRouter, Depends
from app.modules.auth.schemas import (
    LoginRequest, RegisterRequest, TokenResponse, RegisterResponse,
    RefreshRequest, MeResponse
)
from app.modules.auth.service import AuthService
from app.modules.profiles.service import default_display_name
from app.core.dependencies import get_auth_service, get_current_token, get_current_user, get_current_role
from app.config.roles_config import get_role_features
from typing import Dict

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=201)
async def register(
    register_data: RegisterRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Register a new user"""
    return service.register(register_data)


@router.post("/login", response_model=TokenResponse)
async def login(
    login_data: LoginRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Login and get access token plus role"""
    return service.login(login_data)


@router.post("/refresh", response_model=TokenResponse)
async def refresh(
    refresh_data: RefreshRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Exchange a refresh token for a new session"""
    return service.refresh(refresh_data.refresh_token)


@router.post("/logout", status_code=200)
async def logout(
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and invalidate token"""
    service.logout(token)
    return {"message": "You have been signed out successfully."}


@router.get("/me", response_model=MeResponse)
async def get_me(
    current_user: Dict = Depends(get_current_user),
    role: str = Depends(get_current_role),
):
    """Get current authenticated user, their role and role-based navigation (for frontend UI)."""
    return MeResponse(
        id=current_user["id"],
        email=current_user.get("email"),
        role=role,
        display_name=default_display_name(current_user),
        features=get_role_features(role),
        user_metadata=current_user.get("user_metadata") or {},
        created_at=current_user.get("created_at"),
        updated_at=current_user.get("updated_at"),
    )
