from pydantic import BaseModel, EmailStr
from typing import Literal, Optional
from datetime import datetime


class ContactCreate(BaseModel):
    name: str
    email: EmailStr
    subject: Literal["general", "report", "bug", "suggestion"] = "general"
    message: str


class ContactResponse(BaseModel):
    id: str
    name: str
    email: str
    subject: str
    message: str
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
