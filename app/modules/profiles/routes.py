from fastapi import APIRouter, Depends
from app.database.supabase_client import get_service_supabase, SupabaseClient
from app.modules.profiles.schemas import ProfileResponse, ProfileUpdate, PasswordChangeRequest, MessageResponse
from app.modules.profiles.service import ProfileService
from app.core.dependencies import get_current_user
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/profiles", tags=["profiles"])


def get_profile_service(supabase: Client = Depends(get_service_supabase)) -> ProfileService:
    return ProfileService(supabase, admin=SupabaseClient.get_service_client())


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    user_data: Dict = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    """Get the caller's profile (row level security limits reads to the owner)"""
    return service.get_profile(user_data)


@router.put("/me", response_model=ProfileResponse)
async def update_my_profile(
    profile_data: ProfileUpdate,
    user_data: Dict = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    """Update the caller's display name"""
    return service.update_profile(user_data, profile_data)


@router.post("/me/password", response_model=MessageResponse)
async def change_my_password(
    request: PasswordChangeRequest,
    user_data: Dict = Depends(get_current_user),
    service: ProfileService = Depends(get_profile_service)
):
    """Change the caller's password"""
    service.change_password(user_data, request)
    return MessageResponse(message="Password changed successfully")
