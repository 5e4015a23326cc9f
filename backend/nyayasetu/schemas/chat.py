"""Chat schemas"""
from pydantic import BaseModel, Field

from ..models import ChatMessage


class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=4000)
    is_encrypted: bool = False


class ChatResponse(BaseModel):
    response: str
    message: ChatMessage


class ChatHistoryResponse(BaseModel):
    user_id: str
    items: list[ChatMessage]


class SuggestedQuestionsResponse(BaseModel):
    items: list[str]
