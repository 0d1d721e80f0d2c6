from fastapi import APIRouter, Depends
from uniagora.database.supabase_client import get_user_supabase
from uniagora.modules.notifications.schemas import NotificationResponse, UnreadCountResponse
from uniagora.modules.notifications.service import NotificationService
from uniagora.core.dependencies import get_current_user_id
from supabase import Client
from typing import List, Dict

router = APIRouter(prefix="/notifications", tags=["notifications"])


def get_notification_service(supabase: Client = Depends(get_user_supabase)) -> NotificationService:
    return NotificationService(supabase)


@router.get("", response_model=List[NotificationResponse])
async def list_notifications(
    unread_only: bool = False,
    user_data: Dict = Depends(get_current_user_id),
    service: NotificationService = Depends(get_notification_service)
):
    return service.list_notifications(user_data["id"], unread_only=unread_only)


@router.get("/unread-count", response_model=UnreadCountResponse)
async def unread_count(
    user_data: Dict = Depends(get_current_user_id),
    service: NotificationService = Depends(get_notification_service)
):
    """Badge count for the notification bell"""
    return UnreadCountResponse(unread=service.unread_count(user_data["id"]))


@router.post("/read-all")
async def mark_all_read(
    user_data: Dict = Depends(get_current_user_id),
    service: NotificationService = Depends(get_notification_service)
):
    return {"updated": service.mark_all_read(user_data["id"])}


@router.post("/{notification_id}/read", response_model=NotificationResponse)
async def mark_read(
    notification_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: NotificationService = Depends(get_notification_service)
):
    return service.mark_read(notification_id, user_data["id"])


@router.delete("/{notification_id}", status_code=204)
async def delete_notification(
    notification_id: str,
    user_data: Dict = Depends(get_current_user_id),
    service: NotificationService = Depends(get_notification_service)
):
    service.delete_notification(notification_id, user_data["id"])
    return None
