"""HTTP client for the /api/messages pass-through."""
import logging
from datetime import datetime
from typing import List, Optional, Union

import httpx

from uniagora.modules.messages.schemas import MessageResponse

logger = logging.getLogger(__name__)


class MessagesApiClient:
    def __init__(
        self,
        base_url: str,
        access_token: str,
        http_client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ):
        self._owns_client = http_client is None
        self.http = http_client or httpx.AsyncClient(base_url=base_url, timeout=timeout)
        self.headers = {"Authorization": f"Bearer {access_token}"}

    async def fetch_messages(
        self, conversation_id: str, after: Optional[Union[datetime, str]] = None
    ) -> List[MessageResponse]:
        """Messages in ascending time order; only those newer than `after` when given"""
        params = {"conversation_id": conversation_id}
        if after is not None:
            params["after"] = after.isoformat() if isinstance(after, datetime) else after
        response = await self.http.get("/api/messages", params=params, headers=self.headers)
        response.raise_for_status()
        return [MessageResponse(**m) for m in (response.json().get("data") or [])]

    async def send_message(self, conversation_id: str, sender_id: str, text: str) -> MessageResponse:
        """Store a message and return the server-confirmed record"""
        response = await self.http.post(
            "/api/messages",
            json={"conversation_id": conversation_id, "sender_id": sender_id, "text": text},
            headers=self.headers,
        )
        response.raise_for_status()
        data = response.json().get("data")
        if not data:
            raise ValueError("Send response carried no message")
        return MessageResponse(**data)

    async def aclose(self) -> None:
        if self._owns_client:
            await self.http.aclose()
