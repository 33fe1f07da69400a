import logging

from datetime import timedelta
from typing import Optional

from .config import settings
from .schemas import Message
from .storage import MessageStorage
from .sweeper import ExpirySweeper

logger = logging.getLogger("uvicorn")


class MessageService:
    """
    Service for posting and listing ephemeral messages and running their expiry sweep.
    """

    def __init__(self, storage: Optional[MessageStorage] = None, sweep_interval: Optional[float] = None):
        if storage is None:
            storage = MessageStorage(ttl=timedelta(seconds=settings.message_ttl_seconds))
        if sweep_interval is None:
            sweep_interval = settings.sweep_interval_seconds

        self._storage = storage
        self._sweeper = ExpirySweeper(storage, sweep_interval)

    async def start_background_tasks(self):
        """
        Starts the periodic expiry sweep.
        """
        await self._sweeper.start()

    async def stop_background_tasks(self):
        """
        Stops background tasks gracefully.
        """
        await self._sweeper.stop()

    def post_message(self, username: Optional[str], text: Optional[str]) -> Message:
        """
        Stores a new message visible for the configured TTL.

        Raises:
            ValidationError: If username or text is missing or blank.
        """
        message = self._storage.append(username, text)
        logger.info(f"[Message Service] Assigned ID={message.id} to message from '{message.username}'")
        return message

    def list_messages(self) -> list[Message]:
        messages = self._storage.list_messages()
        logger.info(f"[Message Service] Returning {len(messages)} live messages")
        return messages

    def get_health(self) -> dict:
        return {
            "status": "Healthy",
            "messages": self._storage.count(),
            "ttl_seconds": int(self._storage.ttl.total_seconds()),
            "sweep_interval_seconds": self._sweeper.interval,
            "sweeper_running": self._sweeper.running,
        }
