from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class ProfileUpdate(BaseModel):
    full_name: Optional[str] = None
    phone_number: Optional[str] = None  # local 11-digit format
    university: Optional[str] = None


class ProfileResponse(BaseModel):
    id: str
    full_name: str
    phone_number: Optional[str] = None
    university: Optional[str] = None
    is_freelancer: bool = False
    verification_status: str = "unverified"
    image_url: Optional[str] = None
    verification_document_url: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ProfileSummary(BaseModel):
    """Author/owner data embedded in listings, posts and conversations"""
    id: Optional[str] = None
    full_name: Optional[str] = None
    image_url: Optional[str] = None
    verification_status: Optional[str] = None
    university: Optional[str] = None
    phone_number: Optional[str] = None


class ProfileEditForm(BaseModel):
    full_name: str
    phone_number: str
    university: str


class DashboardResponse(BaseModel):
    profile: ProfileResponse
    service_count: int = 0
