"""
Core dependencies for route protection and role checking
"""

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from app.database.supabase_client import get_supabase, get_service_supabase
from app.modules.auth.service import AuthService
from app.modules.profiles.service import ProfileService
from supabase import Client
from typing import Dict, Any
import logging

logger = logging.getLogger(__name__)

security = HTTPBearer()


def _get_request_cache(request: Request) -> Dict[str, Any]:
    """Return request-scoped cache for access data (role)."""
    if not hasattr(request.state, "access_cache"):
        request.state.access_cache = {}
    return request.state.access_cache


def get_auth_service(
    supabase: Client = Depends(get_supabase),
    service_supabase: Client = Depends(get_service_supabase)
) -> AuthService:
    return AuthService(supabase, profiles=ProfileService(service_supabase))


def get_current_token(
    credentials: HTTPAuthorizationCredentials = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    return credentials.credentials


def get_current_user(
    token: str = Depends(get_current_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract current user info from JWT token"""
    return auth_service.get_current_user(token)


def get_user_role(user_id: str, supabase: Client, cache: Dict[str, Any] = None) -> str:
    """Role from user_profiles, memoized per request when a cache is given."""
    if cache is not None and "role" in cache:
        return cache["role"]
    role = ProfileService(supabase).get_role(user_id)
    if cache is not None:
        cache["role"] = role
    return role


def get_current_role(
    request: Request,
    user_data: dict = Depends(get_current_user),
    supabase: Client = Depends(get_service_supabase)
) -> str:
    return get_user_role(user_data["id"], supabase, _get_request_cache(request))


def require_role(required_role: str):
    """Factory function to create role check dependency"""
    def check_role(
        request: Request,
        user_data: dict = Depends(get_current_user),
        supabase: Client = Depends(get_service_supabase)
    ) -> dict:
        """Dependency to check the caller's user_profiles role"""
        role = get_user_role(user_data["id"], supabase, _get_request_cache(request))
        if role != required_role:
            logger.info(f"User {user_data['id']} with role '{role}' denied '{required_role}' route")
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Insufficient role. Required: {required_role}"
            )
        return user_data
    return check_role
