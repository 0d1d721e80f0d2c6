"""
Chat view state: a timer-driven poller plus optimistic sends.

Messages are immutable and append-only, so local state is simply the union of
everything seen, keyed by id and ordered by created_at. A message being sent
is shown immediately under a temporary id and swapped for the server record
once the insert succeeds, or removed if it fails.
"""
import asyncio
import logging
import uuid
from contextlib import suppress
from datetime import datetime, timedelta, timezone
from typing import Iterable, List, Optional

from uniagora.client.api import MessagesApiClient
from uniagora.config import settings
from uniagora.modules.messages.schemas import MessageResponse

logger = logging.getLogger(__name__)

TEMP_ID_PREFIX = "temp-"
SEND_FAILED_MESSAGE = "Message failed to send. Please check your connection."


class MessageSendError(Exception):
    """Raised to the UI after a failed send; `text` is handed back so the input can be restored."""

    def __init__(self, text: str):
        super().__init__(SEND_FAILED_MESSAGE)
        self.text = text


def is_optimistic(message: MessageResponse) -> bool:
    return message.id.startswith(TEMP_ID_PREFIX)


def merge_messages(
    current: Iterable[MessageResponse], incoming: Iterable[MessageResponse]
) -> List[MessageResponse]:
    """Union by id (incoming wins), sorted by timestamp"""
    by_id = {m.id: m for m in current}
    for message in incoming:
        by_id[message.id] = message
    return sorted(by_id.values(), key=lambda m: m.created_at)


class ChatSession:
    def __init__(
        self,
        api: MessagesApiClient,
        conversation_id: str,
        user_id: str,
        poll_interval: Optional[float] = None,
        poll_overlap: Optional[float] = None,
    ):
        self.api = api
        self.conversation_id = conversation_id
        self.user_id = user_id
        self.poll_interval = poll_interval if poll_interval is not None else settings.message_poll_interval
        self.poll_overlap = poll_overlap if poll_overlap is not None else settings.message_poll_overlap
        self.messages: List[MessageResponse] = []
        self.sending = False
        self._cursor: Optional[datetime] = None
        self._poll_task: Optional[asyncio.Task] = None

    @property
    def last_seen(self) -> Optional[datetime]:
        """Newest timestamp returned by a poll. Own sends and placeholders never move it."""
        return self._cursor

    @property
    def fetch_after(self) -> Optional[datetime]:
        """
        Lower bound for the next poll.

        Rows are stamped when their transaction starts, so a message can commit
        after a newer one has already been seen. Re-reading a window behind the
        cursor picks those up; merging by id makes the overlap harmless.
        """
        if self._cursor is None:
            return None
        return self._cursor - timedelta(seconds=self.poll_overlap)

    def can_send(self, text: Optional[str]) -> bool:
        return bool(text and text.strip()) and not self.sending

    async def poll_once(self) -> int:
        """One fetch-and-merge; failures are logged and the next tick tries again"""
        try:
            incoming = await self.api.fetch_messages(self.conversation_id, after=self.fetch_after)
        except Exception as e:
            logger.error(f"Error polling messages for {self.conversation_id}: {e}")
            return 0
        if incoming:
            newest = max(m.created_at for m in incoming)
            if self._cursor is None or newest > self._cursor:
                self._cursor = newest
        known = {m.id for m in self.messages}
        fresh = [m for m in incoming if m.id not in known]
        if fresh:
            self.messages = merge_messages(self.messages, fresh)
        return len(fresh)

    async def _poll_loop(self):
        while True:
            await asyncio.sleep(self.poll_interval)
            await self.poll_once()

    async def start(self) -> None:
        """Initial load, then poll every poll_interval seconds until stop()"""
        await self.poll_once()
        if self._poll_task is None:
            self._poll_task = asyncio.create_task(self._poll_loop())

    async def stop(self) -> None:
        if self._poll_task is not None:
            self._poll_task.cancel()
            with suppress(asyncio.CancelledError):
                await self._poll_task
            self._poll_task = None

    async def send(self, text: str) -> Optional[MessageResponse]:
        """
        Optimistically append `text`, then store it.

        Returns None without touching the network when the text is blank or a
        send is already in flight. Raises MessageSendError after removing the
        placeholder if the request fails; there is no retry.
        """
        if not self.can_send(text):
            return None

        self.sending = True
        placeholder = MessageResponse(
            id=f"{TEMP_ID_PREFIX}{uuid.uuid4().hex}",
            conversation_id=self.conversation_id,
            sender_id=self.user_id,
            text=text,
            created_at=datetime.now(timezone.utc),
        )
        self.messages.append(placeholder)

        try:
            confirmed = await self.api.send_message(self.conversation_id, self.user_id, text)
        except Exception as e:
            logger.error(f"Error sending message: {e}")
            self.messages = [m for m in self.messages if m.id != placeholder.id]
            raise MessageSendError(text) from e
        finally:
            self.sending = False

        self._confirm(placeholder.id, confirmed)
        return confirmed

    def _confirm(self, placeholder_id: str, confirmed: MessageResponse) -> None:
        remaining = [m for m in self.messages if m.id != placeholder_id]
        # A poll may already have delivered the stored copy
        if all(m.id != confirmed.id for m in remaining):
            remaining.append(confirmed)
        self.messages = sorted(remaining, key=lambda m: m.created_at)
