from supabase import Client
from typing import List, Optional, Dict, Any
import logging

logger = logging.getLogger(__name__)


class MessageService:
    """Thin pass-through to the messages table; errors propagate to the route"""

    def __init__(self, supabase: Client):
        self.supabase = supabase

    def fetch_messages(self, conversation_id: str, after: Optional[str] = None) -> List[Dict[str, Any]]:
        """Messages of a conversation in ascending time order, optionally only those newer than `after`"""
        query = self.supabase.table("messages")\
            .select("*")\
            .eq("conversation_id", conversation_id)\
            .order("created_at", desc=False)
        if after:
            query = query.gt("created_at", after)
        result = query.execute()
        return result.data or []

    def send_message(self, conversation_id: str, sender_id: str, text: str) -> Dict[str, Any]:
        """Insert a message and return the stored row (server id and timestamp)"""
        result = self.supabase.table("messages").insert({
            "conversation_id": conversation_id,
            "sender_id": sender_id,
            "text": text,
        }).execute()
        if not result.data:
            raise RuntimeError("Message insert returned no row")
        logger.debug(f"Message {result.data[0].get('id')} stored in conversation {conversation_id}")
        return result.data[0]
