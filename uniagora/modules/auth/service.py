import hashlib
import logging
import time
from supabase import Client
from uniagora.modules.auth.schemas import LoginRequest, RegisterRequest, TokenResponse, RegisterResponse
from uniagora.config.settings import settings
from uniagora.core.validators import is_valid_phone, format_phone_number, MIN_PASSWORD_LENGTH
from fastapi import HTTPException
from typing import Dict, Any, Optional

logger = logging.getLogger(__name__)

# In-memory cache for get_current_user to reduce Supabase auth calls (pollers hit the API every few seconds)
_AUTH_USER_CACHE: Dict[str, tuple] = {}
_AUTH_CACHE_TTL_SEC = 60
_AUTH_CACHE_MAX_SIZE = 500

DEFAULT_UNIVERSITY = "Unspecified University"


def clear_auth_cache() -> None:
    _AUTH_USER_CACHE.clear()


class AuthService:
    def __init__(self, supabase: Client, service_supabase: Optional[Client] = None):
        self.supabase = supabase
        # Profile creation and password changes run with the service role
        self.service_supabase = service_supabase or supabase

    def register(self, register_data: RegisterRequest) -> RegisterResponse:
        """Register a new user with Supabase Auth and create their profile row"""
        if not is_valid_phone(register_data.whatsapp_number):
            raise HTTPException(status_code=400, detail="WhatsApp number must be exactly 11 digits.")
        if len(register_data.password) < MIN_PASSWORD_LENGTH:
            raise HTTPException(status_code=400, detail="Password too short.")
        try:
            auth_response = self.supabase.auth.sign_up({
                "email": register_data.email,
                "password": register_data.password,
                "options": {
                    "data": {"full_name": register_data.full_name}
                }
            })

            if not auth_response.user:
                raise HTTPException(status_code=400, detail="Failed to register user")

            user_id = auth_response.user.id
            self.service_supabase.table("profiles").insert({
                "id": user_id,
                "full_name": register_data.full_name,
                "phone_number": format_phone_number(register_data.whatsapp_number),
                "university": DEFAULT_UNIVERSITY,
                "is_freelancer": False,
            }).execute()

            logger.info(f"Registered user {user_id}")
            return RegisterResponse(
                user_id=user_id,
                email=auth_response.user.email or register_data.email,
                message="User registered successfully"
            )
        except HTTPException:
            raise
        except Exception as e:
            error_message = str(e)
            if "already registered" in error_message.lower() or "already exists" in error_message.lower():
                raise HTTPException(status_code=400, detail="This email is already used. Try logging in.")
            logger.error(f"Registration failed: {error_message}")
            raise HTTPException(status_code=500, detail=f"Registration failed: {error_message}")

    def login(self, login_data: LoginRequest) -> TokenResponse:
        """Authenticate user using Supabase Auth"""
        try:
            auth_response = self.supabase.auth.sign_in_with_password({
                "email": login_data.email,
                "password": login_data.password
            })

            if not auth_response.user or not auth_response.session:
                raise HTTPException(status_code=401, detail="Invalid credentials")

            return TokenResponse(
                access_token=auth_response.session.access_token,
                refresh_token=auth_response.session.refresh_token,
                token_type="bearer",
                user_id=auth_response.user.id,
                email=auth_response.user.email or login_data.email
            )
        except HTTPException:
            raise
        except Exception as e:
            error_message = str(e)
            if "invalid" in error_message.lower() or "credentials" in error_message.lower():
                raise HTTPException(status_code=401, detail="Invalid email or password")
            raise HTTPException(status_code=500, detail=f"Login failed: {error_message}")

    def get_current_user(self, token: str) -> Dict[str, Any]:
        """Get current user details from Supabase Auth token. Uses short TTL cache to reduce auth API calls."""
        try:
            cache_key = hashlib.sha256(token.encode()).hexdigest()
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
        """Logout user using Supabase Auth"""
        _AUTH_USER_CACHE.pop(hashlib.sha256(token.encode()).hexdigest(), None)
        try:
            # Supabase tokens are stateless JWTs; they expire on their own
            self.supabase.auth.sign_out()
            return True
        except Exception as e:
            logger.warning(f"Sign out failed: {e}")
            return False

    def send_password_reset(self, email: str) -> None:
        """Email a reset link that lands on the update-password page"""
        try:
            self.supabase.auth.reset_password_for_email(
                email, {"redirect_to": f"{settings.site_url.rstrip('/')}/update-password"}
            )
        except Exception as e:
            raise HTTPException(status_code=400, detail=str(e))

    def update_password(self, user_id: str, password: str) -> bool:
        """Set a new password via the admin API (requires service role key)"""
        if len(password) < MIN_PASSWORD_LENGTH:
            raise HTTPException(status_code=400, detail="Password too short.")
        if not settings.supabase_service_role_key:
            raise HTTPException(
                status_code=500,
                detail="Service role key not configured. Cannot update password."
            )
        try:
            response = self.service_supabase.auth.admin.update_user_by_id(
                user_id,
                {"password": password}
            )
            if not response.user:
                raise HTTPException(status_code=404, detail="User not found")
            return True
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(
                status_code=500,
                detail=f"Failed to update password: {str(e)}"
            )
