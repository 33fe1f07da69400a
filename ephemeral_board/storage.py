import logging
import threading
import uuid

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from .exceptions import ValidationError
from .schemas import Message

logger = logging.getLogger("uvicorn")

DEFAULT_TTL = timedelta(minutes=5)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class MessageStorage:
    """
    Thread-safe in-memory storage of self-expiring messages.

    Every operation holds the same lock for its whole duration, so listing,
    appending and sweeping never observe a partially filtered collection.
    """

    def __init__(self, ttl: timedelta = DEFAULT_TTL, clock: Callable[[], datetime] = utc_now):
        """
        Args:
            ttl (timedelta): How long a message stays visible after creation.
            clock (Callable): Returns the current aware UTC datetime.
        """
        self._messages: list[Message] = []
        self._ttl = ttl
        self._clock = clock

        self._lock = threading.Lock()

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def list_messages(self) -> list[Message]:
        """
        Evicts expired messages, then returns the live ones in insertion order.

        Returns:
            List[Message]: A snapshot of the live messages.
        """
        with self._lock:
            self._evict_expired(self._clock())
            return list(self._messages)

    def append(self, username: Optional[str], text: Optional[str]) -> Message:
        """
        Creates a message and appends it to the end of the collection.

        Args:
            username (str): Author name, must be non-blank.
            text (str): Message body, must be non-blank.

        Returns:
            Message: The stored message.

        Raises:
            ValidationError: If username or text is missing or blank.
        """
        username = (username or "").strip()
        text = (text or "").strip()

        with self._lock:
            missing = [name for name, value in (("username", username), ("text", text)) if not value]
            if missing:
                raise ValidationError(missing)

            now = self._clock()
            self._evict_expired(now)

            message = Message(
                id=str(uuid.uuid4()),
                username=username,
                text=text,
                created_at=now,
                expires_at=now + self._ttl,
            )
            self._messages.append(message)

        return message

    def sweep(self) -> int:
        """
        Removes every expired message.

        Returns:
            int: How many messages were evicted.
        """
        with self._lock:
            return self._evict_expired(self._clock())

    def count(self) -> int:
        with self._lock:
            self._evict_expired(self._clock())
            return len(self._messages)

    def clear(self):
        with self._lock:
            self._messages = []

    def _evict_expired(self, now: datetime) -> int:
        # Caller must hold the lock.
        live = [message for message in self._messages if message.expires_at > now]
        evicted = len(self._messages) - len(live)
        self._messages = live

        if evicted:
            logger.info(f"[Storage] Evicted {evicted} expired messages")
        return evicted
