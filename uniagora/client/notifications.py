"""Live notification dropdown state backed by Supabase Realtime."""
import logging
from typing import Any, Callable, Dict, List, Optional

from supabase import AsyncClient, acreate_client

from uniagora.config import settings
from uniagora.modules.notifications.schemas import NotificationResponse

logger = logging.getLogger(__name__)


def _extract_record(payload: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Inserted row from a postgres_changes payload"""
    data = payload.get("data")
    if isinstance(data, dict) and data.get("record"):
        return data["record"]
    return payload.get("new") or payload.get("record")


class NotificationFeed:
    def __init__(
        self,
        client: AsyncClient,
        user_id: str,
        limit: int = 20,
        on_change: Optional[Callable[["NotificationFeed"], None]] = None,
    ):
        self.client = client
        self.user_id = user_id
        self.limit = limit
        self.on_change = on_change
        self.notifications: List[NotificationResponse] = []
        self._channel = None

    @classmethod
    async def connect(cls, user_id: str, access_token: str, **kwargs) -> "NotificationFeed":
        """Build a feed on a fresh async client authenticated as the user"""
        client = await acreate_client(settings.supabase_url, settings.supabase_key)
        client.postgrest.auth(access_token)
        await client.realtime.set_auth(access_token)
        return cls(client, user_id, **kwargs)

    @property
    def unread_count(self) -> int:
        return sum(1 for n in self.notifications if not n.is_read)

    async def refresh(self) -> None:
        result = await self.client.table("notifications")\
            .select("*")\
            .eq("user_id", self.user_id)\
            .order("created_at", desc=True)\
            .limit(self.limit)\
            .execute()
        self.notifications = [NotificationResponse(**n) for n in (result.data or [])]
        self._changed()

    async def start(self) -> None:
        """Load the latest notifications, then follow new ones as they are inserted"""
        await self.refresh()
        channel = self.client.channel(f"notifications:{self.user_id}")
        channel.on_postgres_changes(
            "INSERT",
            schema="public",
            table="notifications",
            filter=f"user_id=eq.{self.user_id}",
            callback=self.handle_insert,
        )
        await channel.subscribe()
        self._channel = channel
        logger.info(f"Subscribed to notifications for {self.user_id}")

    async def stop(self) -> None:
        if self._channel is not None:
            await self.client.remove_channel(self._channel)
            self._channel = None

    def handle_insert(self, payload: Dict[str, Any]) -> None:
        record = _extract_record(payload)
        if not record or record.get("user_id") != self.user_id:
            return
        notification = NotificationResponse(**record)
        if any(n.id == notification.id for n in self.notifications):
            return
        self.notifications = [notification] + self.notifications[: self.limit - 1]
        self._changed()

    def _changed(self) -> None:
        if self.on_change is not None:
            self.on_change(self)
