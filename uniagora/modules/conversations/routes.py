from fastapi import APIRouter, Depends
from uniagora.database.supabase_client import get_user_supabase
from uniagora.modules.conversations.schemas import (
    ConversationStart, ConversationStartResponse, ConversationSummary
)
from uniagora.modules.conversations.service import ConversationService
from uniagora.modules.profiles.schemas import ProfileSummary
from uniagora.core.dependencies import get_current_user_id
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/conversations", tags=["conversations"])


def get_conversation_service(supabase: Client = Depends(get_user_supabase)) -> ConversationService:
    return ConversationService(supabase)


@router.get("", response_model=List[ConversationSummary])
async def list_conversations(
    user_data: Dict = Depends(get_current_user_id),
    service: ConversationService = Depends(get_conversation_service)
):
    """Inbox for the signed-in user"""
    return service.list_conversations(user_data["id"])


@router.post("", response_model=ConversationStartResponse)
async def start_conversation(
    request: ConversationStart,
    user_data: Dict = Depends(get_current_user_id),
    service: ConversationService = Depends(get_conversation_service)
):
    """Get or create the conversation with another user (e.g. a listing's owner)"""
    return service.start_conversation(user_data["id"], request.other_user_id)


@router.get("/{conversation_id}/participant", response_model=ProfileSummary)
async def get_other_participant(
    conversation_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: ConversationService = Depends(get_conversation_service)
):
    return service.get_other_participant(conversation_id, user_data["id"])
