from supabase import Client
from uniagora.modules.conversations.schemas import ConversationStartResponse, ConversationSummary
from uniagora.modules.profiles.schemas import ProfileSummary
from uniagora.modules.profiles.service import embedded_profile
from typing import List
from datetime import datetime, timezone
from fastapi import HTTPException
import logging

logger = logging.getLogger(__name__)

NO_MESSAGES_PLACEHOLDER = "Started a conversation"


class ConversationService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def start_conversation(self, user_id: str, other_user_id: str) -> ConversationStartResponse:
        """Resolve (or create) the two-party conversation via the database procedure"""
        if user_id == other_user_id:
            raise HTTPException(status_code=400, detail="You can't message yourself.")
        try:
            result = self.supabase.rpc("get_or_create_conversation", {
                "p_id1": user_id,
                "p_id2": other_user_id,
            }).execute()
        except Exception as e:
            logger.error(f"Error starting chat between {user_id} and {other_user_id}: {e}")
            raise HTTPException(
                status_code=500,
                detail="Could not start a conversation. Please try again later."
            )
        conversation_id = result.data
        if isinstance(conversation_id, list):
            conversation_id = conversation_id[0] if conversation_id else None
        if not conversation_id:
            raise HTTPException(status_code=500, detail="Could not start a conversation. Please try again later.")
        return ConversationStartResponse(conversation_id=str(conversation_id))

    def ensure_participant(self, conversation_id: str, user_id: str) -> None:
        try:
            result = self.supabase.table("conversation_participants")\
                .select("conversation_id")\
                .eq("conversation_id", conversation_id)\
                .eq("user_id", user_id)\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        if not result.data:
            raise HTTPException(status_code=403, detail="You are not part of this conversation")

    def list_conversations(self, user_id: str) -> List[ConversationSummary]:
        """Inbox: each conversation with the other participant and its latest message, newest first"""
        try:
            participants = self.supabase.table("conversation_participants")\
                .select("conversation_id")\
                .eq("user_id", user_id)\
                .execute()
            conversation_ids = [p["conversation_id"] for p in (participants.data or [])]
            if not conversation_ids:
                return []

            others = self.supabase.table("conversation_participants")\
                .select("conversation_id, profiles(id, full_name, image_url)")\
                .in_("conversation_id", conversation_ids)\
                .neq("user_id", user_id)\
                .execute()

            conversations = []
            for other in (others.data or []):
                last = self.supabase.table("messages")\
                    .select("text, created_at")\
                    .eq("conversation_id", other["conversation_id"])\
                    .order("created_at", desc=True)\
                    .limit(1)\
                    .execute()
                last_message = last.data[0] if last.data else None
                conversations.append(ConversationSummary(
                    id=other["conversation_id"],
                    updated_at=last_message["created_at"] if last_message else datetime.now(timezone.utc),
                    last_message=last_message["text"] if last_message else NO_MESSAGES_PLACEHOLDER,
                    other_participant=embedded_profile(other),
                ))
        except Exception as e:
            logger.error(f"Error fetching inbox for {user_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to load your messages.")

        conversations.sort(key=lambda c: c.updated_at, reverse=True)
        return conversations

    def get_other_participant(self, conversation_id: str, user_id: str) -> ProfileSummary:
        """Profile of the other person in a conversation"""
        self.ensure_participant(conversation_id, user_id)
        try:
            result = self.supabase.table("conversation_participants")\
                .select("profiles(*)")\
                .eq("conversation_id", conversation_id)\
                .neq("user_id", user_id)\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        profile = embedded_profile(result.data[0]) if result.data else None
        if profile is None:
            raise HTTPException(status_code=404, detail="Participant not found")
        return profile
