from pydantic import BaseModel
from typing import Optional
from datetime import datetime
from uniagora.modules.profiles.schemas import ProfileSummary


class ConversationStart(BaseModel):
    other_user_id: str


class ConversationStartResponse(BaseModel):
    conversation_id: str


class ConversationSummary(BaseModel):
    id: str
    updated_at: datetime
    last_message: str
    unread_count: int = 0
    other_participant: Optional[ProfileSummary] = None
