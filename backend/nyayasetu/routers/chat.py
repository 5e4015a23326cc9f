"""Chatbot routes"""
from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status

from ..models import GUEST_USER_ID, Role
from ..schemas.chat import ChatHistoryResponse, ChatRequest, ChatResponse, SuggestedQuestionsResponse
from ..services.chat_service import MAX_HISTORY_LIMIT, chat_service
from ..services.legal_chatbot import legal_chatbot
from ..utils.deps import OptionalUser, StorageDep

router = APIRouter(prefix="/chat", tags=["Chat"])


@router.post("", response_model=ChatResponse, summary="Ask the legal assistant")
async def chat(data: ChatRequest, storage: StorageDep, current_user: OptionalUser):
    """Anonymous callers share the guest transcript"""
    user_id = current_user.id if current_user else GUEST_USER_ID
    reply = await chat_service.exchange(storage, user_id, data.message, encrypted=data.is_encrypted)
    return ChatResponse(response=reply.content, message=reply)


@router.get("/history/{user_id}", response_model=ChatHistoryResponse, summary="Chat history")
async def chat_history(
    user_id: str,
    storage: StorageDep,
    current_user: OptionalUser,
    limit: Annotated[int, Query(ge=1, le=MAX_HISTORY_LIMIT)] = 50,
):
    if user_id != GUEST_USER_ID:
        if current_user is None:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Not authenticated")
        if current_user.id != user_id and current_user.role != Role.ADMIN:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Cannot read another user's chat")
    items = await chat_service.history(storage, user_id, limit)
    return ChatHistoryResponse(user_id=user_id, items=items)


@router.get("/suggested-questions", response_model=SuggestedQuestionsResponse, summary="Suggested questions")
async def suggested_questions():
    return SuggestedQuestionsResponse(items=legal_chatbot.suggested_questions())
