from fastapi import APIRouter, Depends
from uniagora.database.supabase_client import get_user_supabase
from uniagora.modules.community.schemas import (
    PostCreate, PostResponse, PostDetailResponse, CommentCreate, CommentResponse
)
from uniagora.modules.community.service import CommunityService
from uniagora.core.dependencies import get_current_user_id
from uniagora.core.validators import FORUM_CATEGORIES
from supabase import Client
from typing import List, Optional, Dict

router = APIRouter(prefix="/community", tags=["community"])


def get_community_service(supabase: Client = Depends(get_user_supabase)) -> CommunityService:
    return CommunityService(supabase)


@router.get("/posts", response_model=List[PostResponse])
async def list_posts(
    category: Optional[str] = None,
    search: Optional[str] = None,
    service: CommunityService = Depends(get_community_service)
):
    """Forum feed, optionally filtered by category"""
    return service.list_posts(category=category, search=search)


@router.get("/categories", response_model=List[str])
async def list_categories():
    return FORUM_CATEGORIES


@router.post("/posts", response_model=PostResponse, status_code=201)
async def create_post(
    post_data: PostCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: CommunityService = Depends(get_community_service)
):
    return service.create_post(user_data["id"], post_data)


@router.get("/posts/{post_id}", response_model=PostDetailResponse)
async def get_post(
    post_id: str,
    service: CommunityService = Depends(get_community_service)
):
    return service.get_post(post_id)


@router.post("/posts/{post_id}/comments", response_model=CommentResponse, status_code=201)
async def add_comment(
    post_id: str,
    comment_data: CommentCreate,
    user_data: Dict = Depends(get_current_user_id),
    service: CommunityService = Depends(get_community_service)
):
    return service.add_comment(post_id, user_data["id"], comment_data)
