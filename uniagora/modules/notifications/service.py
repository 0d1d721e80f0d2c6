from supabase import Client
from uniagora.modules.notifications.schemas import NotificationResponse
from typing import List
from fastapi import HTTPException


class NotificationService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_notifications(self, user_id: str, unread_only: bool = False) -> List[NotificationResponse]:
        """Newest first"""
        try:
            query = self.supabase.table("notifications")\
                .select("*")\
                .eq("user_id", user_id)
            if unread_only:
                query = query.eq("is_read", False)
            result = query.order("created_at", desc=True).execute()
            return [NotificationResponse(**n) for n in (result.data or [])]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def unread_count(self, user_id: str) -> int:
        try:
            result = self.supabase.table("notifications")\
                .select("*", count="exact", head=True)\
                .eq("user_id", user_id)\
                .eq("is_read", False)\
                .execute()
            return result.count or 0
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def mark_read(self, notification_id: str, user_id: str) -> NotificationResponse:
        try:
            result = self.supabase.table("notifications")\
                .update({"is_read": True})\
                .eq("id", notification_id)\
                .eq("user_id", user_id)\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        if not result.data:
            raise HTTPException(status_code=404, detail="Notification not found")
        return NotificationResponse(**result.data[0])

    def mark_all_read(self, user_id: str) -> int:
        """Returns how many notifications changed"""
        try:
            result = self.supabase.table("notifications")\
                .update({"is_read": True})\
                .eq("user_id", user_id)\
                .eq("is_read", False)\
                .execute()
            return len(result.data or [])
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_notification(self, notification_id: str, user_id: str) -> bool:
        try:
            result = self.supabase.table("notifications")\
                .delete()\
                .eq("id", notification_id)\
                .eq("user_id", user_id)\
                .execute()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        if not result.data:
            raise HTTPException(status_code=404, detail="Notification not found")
        return True
