import logging
from supabase import Client, create_client
from app.config.settings import settings
from app.modules.profiles.models import UNDEFINED_TABLE, NO_ROWS
from app.modules.profiles.schemas import ProfileResponse, ProfileUpdate, PasswordChangeRequest
from app.config.roles_config import DEFAULT_ROLE, normalize_role
from typing import Dict, Any, Optional
from fastapi import HTTPException

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


def default_display_name(user_data: Dict[str, Any]) -> str:
    """Display name from user metadata, or the local part of the email"""
    metadata = user_data.get("user_metadata") or {}
    name = metadata.get("display_name")
    if name:
        return name
    email = user_data.get("email") or ""
    return email.split("@")[0]


class ProfileService:
    def __init__(self, supabase: Client, admin: Optional[Client] = None):
        self.supabase = supabase
        self.admin = admin

    def get_role(self, user_id: str) -> str:
        """Role from user_profiles. Any failure resolves to 'student'."""
        try:
            result = self.supabase.table("user_profiles")\
                .select("role")\
                .eq("id", user_id)\
                .single()\
                .execute()
        except Exception as e:
            code = getattr(e, "code", None)
            if code == UNDEFINED_TABLE:
                logger.warning("user_profiles table doesn't exist, defaulting to 'student' role")
            elif code == NO_ROWS:
                logger.info(f"User {user_id} not found in user_profiles, defaulting to 'student' role")
            else:
                logger.error(f"Error fetching role for user {user_id}: {e}")
            return DEFAULT_ROLE
        data = result.data if result else None
        if not data:
            return DEFAULT_ROLE
        return normalize_role(data.get("role"))

    def set_role(self, user_id: str, role: str) -> None:
        result = self.supabase.table("user_profiles")\
            .update({"role": role})\
            .eq("id", user_id)\
            .execute()
        if not result.data:
            raise HTTPException(status_code=404, detail="Profile not found")

    def get_profile(self, user_data: Dict[str, Any]) -> ProfileResponse:
        """Get the caller's profile row"""
        try:
            result = self.supabase.table("user_profiles")\
                .select("*")\
                .eq("id", user_data["id"])\
                .maybe_single()\
                .execute()
        except Exception as e:
            logger.error(f"Error fetching profile {user_data['id']}: {e}")
            raise HTTPException(status_code=500, detail=str(e))
        if not result or not result.data:
            raise HTTPException(status_code=404, detail="Profile not found")
        row = dict(result.data)
        row["role"] = normalize_role(row.get("role"))
        row["display_name"] = default_display_name(user_data)
        return ProfileResponse(**row)

    def _require_admin(self) -> Client:
        if self.admin is None:
            raise HTTPException(
                status_code=500,
                detail="Service role key not configured. Cannot update auth users."
            )
        return self.admin

    def update_profile(self, user_data: Dict[str, Any], profile_data: ProfileUpdate) -> ProfileResponse:
        """Update the display name kept in user metadata"""
        display_name = profile_data.display_name.strip()
        if not display_name:
            raise HTTPException(status_code=400, detail="Display name cannot be empty")
        admin = self._require_admin()
        metadata = dict(user_data.get("user_metadata") or {})
        metadata["display_name"] = display_name
        try:
            response = admin.auth.admin.update_user_by_id(
                user_data["id"],
                {"user_metadata": metadata}
            )
        except Exception as e:
            logger.error(f"Error updating profile {user_data['id']}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to update profile: {str(e)}")
        if not response.user:
            raise HTTPException(status_code=404, detail="User not found")
        return self.get_profile({**user_data, "user_metadata": metadata})

    def change_password(self, user_data: Dict[str, Any], request: PasswordChangeRequest) -> bool:
        """Verify the current password, then set the new one"""
        if not request.current_password or not request.new_password or not request.confirm_password:
            raise HTTPException(status_code=400, detail="All password fields are required")
        if request.new_password != request.confirm_password:
            raise HTTPException(status_code=400, detail="New passwords do not match")
        if len(request.new_password) < MIN_PASSWORD_LENGTH:
            raise HTTPException(status_code=400, detail=f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        admin = self._require_admin()
        try:
            # Separate client so the signed-in session never replaces the service key
            verifier = create_client(settings.supabase_url, settings.supabase_key)
            verifier.auth.sign_in_with_password({
                "email": user_data["email"],
                "password": request.current_password
            })
        except Exception:
            raise HTTPException(status_code=401, detail="Current password is incorrect")
        try:
            admin.auth.admin.update_user_by_id(user_data["id"], {"password": request.new_password})
        except Exception as e:
            logger.error(f"Error changing password for {user_data['id']}: {e}")
            raise HTTPException(status_code=500, detail=f"Failed to change password: {str(e)}")
        logger.info(f"Password changed for user {user_data['id']}")
        return True
