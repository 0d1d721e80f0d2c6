from supabase import Client
from uniagora.modules.community.schemas import (
    PostCreate, PostResponse, PostDetailResponse, CommentCreate, CommentResponse
)
from uniagora.modules.profiles.schemas import ProfileSummary
from uniagora.modules.profiles.service import embedded_profile
from uniagora.core.filters import filter_rows
from uniagora.core.validators import FORUM_CATEGORIES, MIN_POST_CONTENT_LENGTH, MIN_COMMENT_LENGTH
from typing import List, Optional
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

AUTHOR_COLUMNS = "*, profiles(full_name, image_url)"
POST_DETAIL_COLUMNS = "*, profiles(id, full_name, image_url, verification_status)"


class CommunityService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_posts(self, category: Optional[str] = None, search: Optional[str] = None) -> List[PostResponse]:
        """Forum feed, newest first"""
        try:
            query = self.supabase.table("community_posts").select(AUTHOR_COLUMNS)
            if category and category != "All":
                query = query.eq("category", category)
            result = query.order("created_at", desc=True).execute()
        except Exception as e:
            logger.error(f"Error fetching community posts: {e}")
            raise HTTPException(status_code=500, detail="Failed to load community posts.")
        rows = filter_rows(result.data or [], search, ("title", "content"))
        return [PostResponse(**{**r, "profiles": embedded_profile(r)}) for r in rows]

    def create_post(self, user_id: str, post_data: PostCreate) -> PostResponse:
        """Start a discussion"""
        if not post_data.title.strip():
            raise HTTPException(status_code=400, detail="Title is required.")
        if post_data.category not in FORUM_CATEGORIES:
            raise HTTPException(status_code=400, detail=f"Unknown category: {post_data.category}")
        if len(post_data.content) < MIN_POST_CONTENT_LENGTH:
            raise HTTPException(status_code=400, detail="Content must be at least 10 characters long.")
        try:
            result = self.supabase.table("community_posts").insert({
                "user_id": user_id,
                "title": post_data.title,
                "category": post_data.category,
                "content": post_data.content,
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to create post. Please try again.")

            return PostResponse(**result.data[0])
        except HTTPException:
            raise
        except Exception as e:
            logger.error(f"Error creating post: {e}")
            raise HTTPException(status_code=500, detail="Failed to create post. Please try again.")

    def get_post(self, post_id: str) -> PostDetailResponse:
        """Post with author and comments, oldest comment first"""
        try:
            result = self.supabase.table("community_posts")\
                .select(POST_DETAIL_COLUMNS)\
                .eq("id", post_id)\
                .maybe_single()\
                .execute()
            if not result or not result.data:
                raise HTTPException(status_code=404, detail="Post not found")

            comments_result = self.supabase.table("community_comments")\
                .select(AUTHOR_COLUMNS)\
                .eq("post_id", post_id)\
                .order("created_at", desc=False)\
                .execute()
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

        comments = [
            CommentResponse(**{**c, "profiles": embedded_profile(c)})
            for c in (comments_result.data or [])
        ]
        post = result.data
        return PostDetailResponse(**{**post, "profiles": embedded_profile(post), "comments": comments})

    def add_comment(self, post_id: str, user_id: str, comment_data: CommentCreate) -> CommentResponse:
        """Reply to a post; the response carries the author for immediate display"""
        content = comment_data.content.strip()
        if len(content) < MIN_COMMENT_LENGTH:
            raise HTTPException(status_code=400, detail="Comment must be at least 2 characters.")
        try:
            result = self.supabase.table("community_comments").insert({
                "post_id": post_id,
                "user_id": user_id,
                "content": content,
            }).execute()

            if not result.data:
                raise HTTPException(status_code=500, detail="Failed to add comment")

            author = self.supabase.table("profiles")\
                .select("full_name, image_url")\
                .eq("id", user_id)\
                .maybe_single()\
                .execute()
            comment = CommentResponse(**result.data[0])
            if author and author.data:
                comment.profiles = ProfileSummary(**author.data)
            return comment
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
