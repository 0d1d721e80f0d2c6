from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from uniagora.database.supabase_client import get_user_supabase
from uniagora.modules.messages.schemas import MessageCreate
from uniagora.modules.messages.service import MessageService
from supabase import Client
from typing import Optional
import logging

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/messages", tags=["messages"])


def get_message_service(supabase: Client = Depends(get_user_supabase)) -> MessageService:
    return MessageService(supabase)


@router.get("")
async def get_messages(
    conversation_id: Optional[str] = None,
    after: Optional[str] = None,
    service: MessageService = Depends(get_message_service)
):
    """Messages of a conversation (ascending), optionally only those created after `after`"""
    if not conversation_id:
        return JSONResponse(status_code=400, content={"error": "Missing conversation_id"})
    try:
        data = service.fetch_messages(conversation_id, after)
    except Exception as e:
        logger.error(f"Error fetching messages for {conversation_id}: {e}")
        return JSONResponse(status_code=500, content={"error": str(e)})
    return {"data": data}


@router.post("")
async def send_message(
    request: Request,
    service: MessageService = Depends(get_message_service)
):
    """Store a message; the response carries the server-assigned record"""
    try:
        body = MessageCreate(**(await request.json()))
    except Exception:
        return JSONResponse(status_code=400, content={"error": "Missing fields"})

    if not body.conversation_id or not body.sender_id or not (body.text or "").strip():
        return JSONResponse(status_code=400, content={"error": "Missing fields"})

    try:
        data = service.send_message(body.conversation_id, body.sender_id, body.text)
    except Exception as e:
        logger.error(f"Error sending message to {body.conversation_id}: {e}")
        return JSONResponse(status_code=500, content={"error": str(e)})
    return {"data": data}
