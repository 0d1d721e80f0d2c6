from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class MessageCreate(BaseModel):
    # Optional so a missing field is reported as {"error": "Missing fields"}, not a 422
    conversation_id: Optional[str] = None
    sender_id: Optional[str] = None
    text: Optional[str] = None


class MessageResponse(BaseModel):
    id: str
    conversation_id: Optional[str] = None
    sender_id: str
    text: str
    created_at: datetime

    class Config:
        from_attributes = True
