from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime
from uniagora.modules.profiles.schemas import ProfileSummary


class PostCreate(BaseModel):
    title: str
    category: str = "General"
    content: str


class PostResponse(BaseModel):
    id: str
    user_id: str
    title: str
    category: str
    content: str
    created_at: Optional[datetime] = None
    profiles: Optional[ProfileSummary] = None

    class Config:
        from_attributes = True


class CommentCreate(BaseModel):
    content: str


class CommentResponse(BaseModel):
    id: str
    post_id: str
    user_id: str
    content: str
    created_at: Optional[datetime] = None
    profiles: Optional[ProfileSummary] = None

    class Config:
        from_attributes = True


class PostDetailResponse(PostResponse):
    comments: List[CommentResponse] = []
