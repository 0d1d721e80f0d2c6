from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime
from uniagora.modules.profiles.schemas import ProfileSummary


class ServiceCreate(BaseModel):
    title: str
    category: str
    description: str
    price_range: Optional[str] = None


class ServiceUpdate(BaseModel):
    title: Optional[str] = None
    category: Optional[str] = None
    description: Optional[str] = None
    price_range: Optional[str] = None


class ServiceResponse(BaseModel):
    id: str
    user_id: str
    title: str
    category: str
    description: Optional[str] = None
    price_range: Optional[str] = None
    image_url: Optional[str] = None
    is_featured: bool = False
    created_at: Optional[datetime] = None
    profiles: Optional[ProfileSummary] = None
    average_rating: Optional[float] = None
    review_count: int = 0

    class Config:
        from_attributes = True


class ReviewCreate(BaseModel):
    rating: int = Field(5, ge=1, le=5)
    comment: str


class ReviewResponse(BaseModel):
    id: str
    service_id: str
    user_id: str
    rating: int
    comment: str
    created_at: Optional[datetime] = None
    profiles: Optional[ProfileSummary] = None

    class Config:
        from_attributes = True


class ServiceDetailResponse(ServiceResponse):
    reviews: List[ReviewResponse] = []
