import hashlib
import logging
import time
from supabase import Client
from app.modules.auth.schemas import LoginRequest, RegisterRequest, TokenResponse, RegisterResponse
from app.modules.profiles.service import ProfileService
from app.database.supabase_client import SupabaseClient
from app.config.settings import settings
from fastapi import HTTPException
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

# In-memory cache for get_current_user to reduce Supabase auth calls (e.g. many parallel requests with same token)
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_TTL_SEC = 60
_AUTH_CACHE_MAX_SIZE = 500


def _token_cache_key(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


def clear_auth_cache():
    _AUTH_USER_CACHE.clear()


class AuthService:
    def __init__(self, supabase: Client, profiles: Optional[ProfileService] = None):
        self.supabase = supabase
        self.profiles = profiles or ProfileService(supabase)

    def register(self, register_data: RegisterRequest) -> RegisterResponse:
        """Register a new user using Supabase Auth. The signup trigger creates the profile row as 'student'."""
        try:
            auth_response = self.supabase.auth.sign_up({
                "email": register_data.email,
                "password": register_data.password,
                "options": {
                    "email_redirect_to": settings.email_redirect_url,
                    "data": {"role": register_data.role}
                }
            })
        except Exception as e:
            error_message = str(e)
            logger.error(f"Error signing up {register_data.email}: {error_message}")
            if "already registered" in error_message.lower() or "already exists" in error_message.lower():
                raise HTTPException(status_code=400, detail="This email is already registered")
            raise HTTPException(status_code=500, detail=f"Registration failed: {error_message}")

        if not auth_response.user:
            raise HTTPException(status_code=400, detail="Failed to register user")

        user_id = auth_response.user.id
        logger.info(f"User created: {user_id}")
        role = "student"
        if register_data.role != "student":
            role = self._promote_new_user(user_id, register_data.role)

        return RegisterResponse(
            user_id=user_id,
            email=auth_response.user.email or register_data.email,
            role=role,
            message="Account created successfully. Please check your email to verify your account."
        )

    def _promote_new_user(self, user_id: str, role: str) -> str:
        """Set a non-default role on a freshly created profile. Falls back to 'student' on failure."""
        service_client = SupabaseClient.get_service_client()
        if service_client is None:
            logger.warning(f"Service role key not configured; user {user_id} keeps role 'student'")
            return "student"
        try:
            ProfileService(service_client).set_role(user_id, role)
            return role
        except Exception as e:
            logger.error(f"Could not set role '{role}' for user {user_id}: {e}")
            return "student"

    def login(self, login_data: LoginRequest) -> TokenResponse:
        """Authenticate user using Supabase Auth and resolve their role"""
        try:
            auth_response = self.supabase.auth.sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password
            })
        except Exception as e:
            error_message = str(e)
            if "invalid" in error_message.lower() or "credentials" in error_message.lower():
                raise HTTPException(status_code=401, detail="Invalid email or password")
            if "not confirmed" in error_message.lower():
                raise HTTPException(status_code=403, detail="Please verify your email before signing in")
            logger.error(f"Error signing in {login_data.email}: {error_message}")
            raise HTTPException(status_code=500, detail=f"Login failed: {error_message}")

        if not auth_response.user or not auth_response.session:
            raise HTTPException(status_code=401, detail="Invalid credentials")

        return self._token_response(auth_response, login_data.email)

    def refresh(self, refresh_token: str) -> TokenResponse:
        """Exchange a refresh token for a new session"""
        try:
            auth_response = self.supabase.auth.refresh_session(refresh_token)
        except Exception as e:
            logger.info(f"Refresh failed: {e}")
            raise HTTPException(status_code=401, detail="Invalid or expired refresh token")

        if not auth_response.user or not auth_response.session:
            raise HTTPException(status_code=401, detail="Invalid or expired refresh token")

        return self._token_response(auth_response, auth_response.user.email or "")

    def _token_response(self, auth_response, fallback_email: str) -> TokenResponse:
        user = auth_response.user
        return TokenResponse(
            access_token=auth_response.session.access_token,
            refresh_token=auth_response.session.refresh_token,
            token_type="bearer",
            user_id=user.id,
            email=user.email or fallback_email,
            role=self.profiles.get_role(user.id)
        )

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Get current user details from Supabase Auth token. Uses short TTL cache to reduce auth API calls."""
        try:
            cache_key = _token_cache_key(token)
            now = time.monotonic()
            if cache_key in _AUTH_USER_CACHE:
                user_data, expiry = _AUTH_USER_CACHE[cache_key]
                if now < expiry:
                    return user_data
                del _AUTH_USER_CACHE[cache_key]
            user_response = self.supabase.auth.get_user(jwt=token)
            if not user_response or not user_response.user:
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            user = user_response.user
            user_data = {
                "id": user.id,
                "email": user.email,
                "user_metadata": user.user_metadata or {},
                "app_metadata": user.app_metadata or {},
                "created_at": user.created_at,
                "updated_at": user.updated_at
            }
            if len(_AUTH_USER_CACHE) < _AUTH_CACHE_MAX_SIZE:
                _AUTH_USER_CACHE[cache_key] = (user_data, now + _AUTH_CACHE_TTL_SEC)
            return user_data
        except HTTPException:
            raise
        except Exception as e:
            error_msg = str(e)
            if "JWT" in error_msg or "expired" in error_msg.lower() or "invalid" in error_msg.lower():
                raise HTTPException(status_code=401, detail="Invalid or expired token")
            raise HTTPException(status_code=401, detail="Authentication failed")

    def logout(self, token: str) -> bool:
        """Logout user using Supabase Auth and drop the cached user for this token"""
        _AUTH_USER_CACHE.pop(_token_cache_key(token), None)
        try:
            # Supabase access tokens are stateless JWTs; they stay valid until they expire
            self.supabase.auth.sign_out()
            return True
        except Exception as e:
            logger.warning(f"Supabase sign out error: {e}")
            return False
