from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Message(BaseModel):
    """
    A posted message. ``expires_at`` is internal and never serialized.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    username: str
    text: str
    created_at: datetime
    expires_at: datetime = Field(exclude=True, repr=False)


class MessageCreate(BaseModel):
    username: Optional[str] = None
    text: Optional[str] = None


class MessageResponse(BaseModel):
    id: str
    username: str
    text: str
    timestamp: datetime

    @classmethod
    def from_message(cls, message: Message) -> "MessageResponse":
        return cls(
            id=message.id,
            username=message.username,
            text=message.text,
            timestamp=message.created_at,
        )


class ErrorResponse(BaseModel):
    error: str
