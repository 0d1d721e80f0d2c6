from fastapi import APIRouter, Depends, UploadFile, File
from uniagora.database.supabase_client import get_user_supabase
from uniagora.modules.profiles.schemas import (
    ProfileUpdate, ProfileResponse, ProfileEditForm, DashboardResponse
)
from uniagora.modules.profiles.service import ProfileService
from uniagora.modules.storage.service import (
    StorageService, get_storage_service, PROFILES_PREFIX, verification_prefix
)
from uniagora.core.dependencies import get_current_user_id
from supabase import Client
from typing import Dict

router = APIRouter(prefix="/profiles", tags=["profiles"])


def get_profile_service(supabase: Client = Depends(get_user_supabase)) -> ProfileService:
    return ProfileService(supabase)


@router.get("/me", response_model=ProfileResponse)
async def get_my_profile(
    user_data: Dict = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service)
):
    """Get the signed-in user's profile"""
    return service.get_profile(user_data["id"])


@router.put("/me", response_model=ProfileResponse)
async def update_my_profile(
    profile_data: ProfileUpdate,
    user_data: Dict = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service)
):
    """Update name, phone (11 digits) and university"""
    return service.update_profile(user_data["id"], profile_data)


@router.get("/me/edit", response_model=ProfileEditForm)
async def get_my_edit_form(
    user_data: Dict = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service)
):
    return service.get_edit_form(user_data["id"])


@router.get("/me/dashboard", response_model=DashboardResponse)
async def get_my_dashboard(
    user_data: Dict = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service)
):
    return service.get_dashboard(user_data["id"])


@router.post("/me/freelancer", response_model=ProfileResponse)
async def become_freelancer(
    user_data: Dict = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service)
):
    """Enable listing services for this account"""
    return service.become_freelancer(user_data["id"])


@router.post("/me/image", response_model=ProfileResponse)
async def upload_profile_image(
    file: UploadFile = File(...),
    user_data: Dict = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
    storage: StorageService = Depends(get_storage_service)
):
    """Upload a profile picture (images up to 2MB)"""
    image_url = await storage.upload_image(file, PROFILES_PREFIX)
    return service.set_image(user_data["id"], image_url)


@router.post("/me/verification", response_model=ProfileResponse)
async def submit_verification(
    file: UploadFile = File(...),
    user_data: Dict = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service),
    storage: StorageService = Depends(get_storage_service)
):
    """Upload a student ID document and mark the profile as pending review"""
    document_url = await storage.upload_document(file, verification_prefix(user_data["id"]))
    return service.submit_verification(user_data["id"], document_url)


@router.get("/{user_id}", response_model=ProfileResponse)
async def get_profile(
    user_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: ProfileService = Depends(get_profile_service)
):
    """Get profile by ID"""
    return service.get_profile(user_id)
