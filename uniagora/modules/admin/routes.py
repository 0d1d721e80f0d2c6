from fastapi import APIRouter, Depends
from uniagora.database.supabase_client import get_user_supabase
from uniagora.modules.admin.schemas import AdminStats
from uniagora.modules.admin.service import AdminService
from uniagora.modules.profiles.schemas import ProfileResponse
from uniagora.modules.services.schemas import ServiceResponse
from uniagora.modules.community.schemas import PostResponse
from uniagora.modules.contact.schemas import ContactResponse
from uniagora.core.dependencies import require_admin
from supabase import Client
from typing import List, Optional

# Every route in the console requires an admin session
router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])


def get_admin_service(supabase: Client = Depends(get_user_supabase)) -> AdminService:
    return AdminService(supabase)


@router.get("/stats", response_model=AdminStats)
async def get_stats(service: AdminService = Depends(get_admin_service)):
    return service.get_stats()


@router.get("/users", response_model=List[ProfileResponse])
async def list_users(
    search: Optional[str] = None,
    status: Optional[str] = None,
    service: AdminService = Depends(get_admin_service)
):
    """Profiles filtered by name/university and verification status (all|unverified|pending|verified)"""
    return service.list_users(search=search, status=status)


@router.post("/users/{user_id}/verification", response_model=ProfileResponse)
async def toggle_verification(
    user_id: str,
    service: AdminService = Depends(get_admin_service)
):
    """Toggle a profile between verified and unverified"""
    return service.toggle_verification(user_id)


@router.get("/services", response_model=List[ServiceResponse])
async def list_services(
    search: Optional[str] = None,
    service: AdminService = Depends(get_admin_service)
):
    return service.list_services(search=search)


@router.post("/services/{service_id}/featured", response_model=ServiceResponse)
async def toggle_featured(
    service_id: str,
    service: AdminService = Depends(get_admin_service)
):
    return service.toggle_featured(service_id)


@router.delete("/services/{service_id}", status_code=204)
async def delete_service(
    service_id: str,
    service: AdminService = Depends(get_admin_service)
):
    service.delete_service(service_id)
    return None


@router.get("/forum", response_model=List[PostResponse])
async def list_posts(
    search: Optional[str] = None,
    service: AdminService = Depends(get_admin_service)
):
    return service.list_posts(search=search)


@router.delete("/forum/{post_id}", status_code=204)
async def delete_post(
    post_id: str,
    service: AdminService = Depends(get_admin_service)
):
    service.delete_post(post_id)
    return None


@router.get("/contact", response_model=List[ContactResponse])
async def list_contact_submissions(
    search: Optional[str] = None,
    service: AdminService = Depends(get_admin_service)
):
    return service.list_contact_submissions(search=search)


@router.delete("/contact/{submission_id}", status_code=204)
async def delete_contact_submission(
    submission_id: str,
    service: AdminService = Depends(get_admin_service)
):
    service.delete_contact_submission(submission_id)
    return None
