from supabase import Client
from uniagora.modules.profiles.schemas import (
    ProfileUpdate, ProfileResponse, ProfileSummary, ProfileEditForm, DashboardResponse
)
from uniagora.core.validators import is_valid_phone, format_phone_number, display_phone_number
from typing import Optional, Dict, Any
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)


def embedded_profile(row: Dict[str, Any], key: str = "profiles") -> Optional[ProfileSummary]:
    """PostgREST may return an embedded to-one relation as an object or a one-element list"""
    value = row.get(key)
    if isinstance(value, list):
        value = value[0] if value else None
    if not value:
        return None
    return ProfileSummary(**value)


class ProfileService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def find_profile(self, user_id: str) -> Optional[ProfileResponse]:
        """Profile by ID, or None if the row does not exist yet"""
        try:
            result = self.supabase.table("profiles")\
                .select("*")\
                .eq("id", user_id)\
                .maybe_single()\
                .execute()
            if not result or not result.data:
                return None
            return ProfileResponse(**result.data)
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def get_profile(self, user_id: str) -> ProfileResponse:
        """Get profile by ID"""
        profile = self.find_profile(user_id)
        if profile is None:
            raise HTTPException(status_code=404, detail="Profile not found")
        return profile

    def get_edit_form(self, user_id: str) -> ProfileEditForm:
        """Current values for the edit form, phone shown in local format"""
        profile = self.get_profile(user_id)
        return ProfileEditForm(
            full_name=profile.full_name or "",
            phone_number=display_phone_number(profile.phone_number),
            university=profile.university or "",
        )

    def update_profile(self, user_id: str, profile_data: ProfileUpdate) -> ProfileResponse:
        """Update own profile"""
        update_data = {}
        if profile_data.full_name is not None:
            update_data["full_name"] = profile_data.full_name
        if profile_data.phone_number is not None:
            if not is_valid_phone(profile_data.phone_number):
                raise HTTPException(status_code=400, detail="Please enter a valid 11-digit phone number.")
            update_data["phone_number"] = format_phone_number(profile_data.phone_number)
        if profile_data.university is not None:
            update_data["university"] = profile_data.university
        if not update_data:
            return self.get_profile(user_id)
        return self._update(user_id, update_data)

    def become_freelancer(self, user_id: str) -> ProfileResponse:
        return self._update(user_id, {"is_freelancer": True})

    def set_image(self, user_id: str, image_url: str) -> ProfileResponse:
        return self._update(user_id, {"image_url": image_url})

    def submit_verification(self, user_id: str, document_url: str) -> ProfileResponse:
        """Attach the uploaded document and queue the profile for admin review"""
        profile = self._update(user_id, {
            "verification_document_url": document_url,
            "verification_status": "pending",
        })
        logger.info(f"Profile {user_id} submitted for verification")
        return profile

    def get_dashboard(self, user_id: str) -> DashboardResponse:
        """Profile plus listing count for freelancers"""
        profile = self.get_profile(user_id)
        service_count = 0
        if profile.is_freelancer:
            try:
                result = self.supabase.table("services")\
                    .select("*", count="exact", head=True)\
                    .eq("user_id", user_id)\
                    .execute()
                service_count = result.count or 0
            except Exception as e:
                logger.error(f"Error counting services for {user_id}: {e}")
        return DashboardResponse(profile=profile, service_count=service_count)

    def _update(self, user_id: str, update_data: Dict[str, Any]) -> ProfileResponse:
        try:
            result = self.supabase.table("profiles")\
                .update(update_data)\
                .eq("id", user_id)\
                .execute()

            if not result.data:
                raise HTTPException(status_code=404, detail="Profile not found")

            return ProfileResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
