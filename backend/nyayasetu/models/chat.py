"""Chat transcript entries"""
from datetime import datetime

from pydantic import Field

from .base import Record, utcnow

GUEST_USER_ID = "guest"


class ChatMessage(Record):
    user_id: str
    is_user_message: bool
    content: str
    created_at: datetime = Field(default_factory=utcnow)
