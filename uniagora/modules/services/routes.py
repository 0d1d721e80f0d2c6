from fastapi import APIRouter, Depends, UploadFile, File, Form
from uniagora.database.supabase_client import get_user_supabase
from uniagora.modules.services.schemas import (
    ServiceCreate, ServiceUpdate, ServiceResponse, ServiceDetailResponse,
    ReviewCreate, ReviewResponse
)
from uniagora.modules.services.service import MarketplaceService
from uniagora.modules.storage.service import StorageService, get_storage_service, SERVICES_PREFIX
from uniagora.core.dependencies import get_current_user_id
from uniagora.core.validators import SERVICE_CATEGORIES
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/services", tags=["services"])


def get_marketplace_service(supabase: Client = Depends(get_user_supabase)) -> MarketplaceService:
    return MarketplaceService(supabase)


@router.get("", response_model=List[ServiceResponse])
async def list_services(
    category: Optional[str] = None,
    search: Optional[str] = None,
    featured_first: bool = False,
    limit: int = 50,
    offset: int = 0,
    service: MarketplaceService = Depends(get_marketplace_service)
):
    """Browse the marketplace, optionally by category or search text"""
    return service.list_services(
        category=category, search=search, featured_first=featured_first, limit=limit, offset=offset
    )


@router.get("/categories", response_model=List[str])
async def list_categories():
    return SERVICE_CATEGORIES


@router.get("/mine", response_model=List[ServiceResponse])
async def list_my_services(
    user_data: Dict = Depends(get_current_user_id),
    service: MarketplaceService = Depends(get_marketplace_service)
):
    return service.list_user_services(user_data["id"])


@router.post("", response_model=ServiceResponse, status_code=201)
async def create_service(
    title: str = Form(...),
    category: str = Form(...),
    description: str = Form(...),
    price_range: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    user_data: Dict = Depends(get_current_user_id),
    service: MarketplaceService = Depends(get_marketplace_service),
    storage: StorageService = Depends(get_storage_service)
):
    """Create a listing (freelancers only) with an optional image up to 2MB"""
    service.ensure_freelancer(user_data["id"])
    image_url = None
    if image is not None and image.filename:
        image_url = await storage.upload_image(image, SERVICES_PREFIX)
    service_data = ServiceCreate(
        title=title, category=category, description=description, price_range=price_range
    )
    return service.create_service(user_data["id"], service_data, image_url)


@router.get("/{service_id}", response_model=ServiceDetailResponse)
async def get_service(
    service_id: str,
    service: MarketplaceService = Depends(get_marketplace_service)
):
    """Listing detail with owner and reviews"""
    return service.get_service(service_id)


@router.put("/{service_id}", response_model=ServiceResponse)
async def update_service(
    service_id: str,
    title: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    price_range: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),
    user_data: Dict = Depends(get_current_user_id),
    service: MarketplaceService = Depends(get_marketplace_service),
    storage: StorageService = Depends(get_storage_service)
):
    """Edit own listing; a new image replaces the old URL"""
    image_url = None
    if image is not None and image.filename:
        image_url = await storage.upload_image(image, SERVICES_PREFIX)
    service_data = ServiceUpdate(
        title=title, category=category, description=description, price_range=price_range
    )
    return service.update_service(service_id, user_data["id"], service_data, image_url)


@router.delete("/{service_id}", status_code=204)
async def delete_service(
    service_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: MarketplaceService = Depends(get_marketplace_service)
):
    service.delete_service(service_id, user_data["id"])
    return None


@router.get("/{service_id}/reviews", response_model=List[ReviewResponse])
async def list_reviews(
    service_id: str,
    service: MarketplaceService = Depends(get_marketplace_service)
):
    return service.list_reviews(service_id)


@router.post("/{service_id}/reviews", response_model=ReviewResponse, status_code=201)
async def create_review(
    service_id: str,
    review_data: ReviewCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: MarketplaceService = Depends(get_marketplace_service)
):
    """Rate a listing 1-5 with a comment (one review per user)"""
    return service.create_review(service_id, user_data["id"], review_data)
