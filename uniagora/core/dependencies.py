"""
Core dependencies for route protection
"""

from fastapi import Depends, HTTPException, Security, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from uniagora.config import settings
from uniagora.database.supabase_client import get_supabase, get_service_supabase
from uniagora.modules.auth.service import AuthService
from supabase import Client
from typing import Optional
import logging

logger = logging.getLogger(__name__)

# auto_error=False so a missing header is a 401 (login redirect), not a bare 403
security = HTTPBearer(auto_error=False)


def get_auth_service(
    supabase: Client = Depends(get_supabase),
    service_supabase: Client = Depends(get_service_supabase),
) -> AuthService:
    return AuthService(supabase, service_supabase)


def get_current_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Security(security)
) -> str:
    """Extract JWT token from Authorization header"""
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return credentials.credentials


def get_current_user_id(
    token: str = Depends(get_current_token),
    auth_service: AuthService = Depends(get_auth_service)
) -> dict:
    """Extract current user info from JWT token"""
    return auth_service.get_current_user(token)


def is_admin(user_data: dict) -> bool:
    """Admin if the e-mail is on the configured list or app_metadata marks the account"""
    email = (user_data.get("email") or "").lower()
    if email and email in settings.get_admin_emails_list():
        return True
    # app_metadata is set server-side and cannot be modified by users
    app_metadata = user_data.get("app_metadata") or {}
    return app_metadata.get("type") == settings.admin_metadata_type


def require_admin(user_data: dict = Depends(get_current_user_id)) -> dict:
    """Dependency guarding the admin console"""
    if not is_admin(user_data):
        logger.warning(f"Non-admin user {user_data.get('id')} refused from admin route")
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Restricted Access: Admin privileges required."
        )
    return user_data
