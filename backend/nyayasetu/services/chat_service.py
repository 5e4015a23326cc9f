"""Chat transcript handling"""
import logging

from ..models import ChatMessage
from ..storage import Storage
from .legal_chatbot import LegalChatbot, legal_chatbot

logger = logging.getLogger(__name__)

MAX_HISTORY_LIMIT = 200


class ChatService:
    """Stores both sides of a chatbot exchange"""

    def __init__(self, chatbot: LegalChatbot | None = None):
        self.chatbot = chatbot or legal_chatbot

    async def exchange(
        self, storage: Storage, user_id: str, message: str, *, encrypted: bool = False
    ) -> ChatMessage:
        """Store the user's message, answer it and store the answer"""
        await storage.create_chat_message(user_id=user_id, is_user_message=True, content=message)
        reply = self.chatbot.reply(message, encrypted=encrypted)
        logger.debug("Chat reply topic=%s user=%s", reply.topic, user_id)
        return await storage.create_chat_message(user_id=user_id, is_user_message=False, content=reply.text)

    async def history(self, storage: Storage, user_id: str, limit: int = 50) -> list[ChatMessage]:
        limit = max(1, min(limit, MAX_HISTORY_LIMIT))
        return await storage.get_chat_history(user_id, limit)


chat_service = ChatService()
