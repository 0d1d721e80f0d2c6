from fastapi import APIRouter, Depends
from uniagora.database.supabase_client import get_user_supabase
from uniagora.modules.auth.schemas import (
    LoginRequest, RegisterRequest, TokenResponse, RegisterResponse,
    ForgotPasswordRequest, UpdatePasswordRequest
)
from uniagora.modules.auth.service import AuthService
from uniagora.modules.profiles.service import ProfileService
from uniagora.core.dependencies import get_auth_service, get_current_token, get_current_user_id, is_admin
from supabase import Client
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
    """Login and get access token"""
    return service.login(login_data)


@router.post("/logout", status_code=200)
async def logout(
    token: str = Depends(get_current_token),
    service: AuthService = Depends(get_auth_service)
):
    """Logout and invalidate token"""
    service.logout(token)
    return {"message": "Logged out successfully"}


@router.get("/me")
async def get_current_user(
    current_user: Dict = Depends(get_current_user_id),
    supabase: Client = Depends(get_user_supabase),
):
    """Current user, their profile (if created) and whether the admin console is available."""
    profile = ProfileService(supabase).find_profile(current_user["id"])
    return {
        **current_user,
        "profile": profile.model_dump() if profile else None,
        "is_admin": is_admin(current_user),
    }


@router.post("/forgot-password", status_code=200)
async def forgot_password(
    request: ForgotPasswordRequest,
    service: AuthService = Depends(get_auth_service)
):
    """Send a password reset link"""
    service.send_password_reset(request.email)
    return {"message": "Password reset link sent"}


@router.post("/update-password", status_code=200)
async def update_password(
    request: UpdatePasswordRequest,
    current_user: Dict = Depends(get_current_user_id),
    service: AuthService = Depends(get_auth_service)
):
    """Set a new password for the signed-in user"""
    service.update_password(current_user["id"], request.password)
    return {"message": "Password updated successfully"}
