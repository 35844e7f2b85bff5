"""Start chat use case."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from homestead.application.usecase.base import BaseUseCase, CamelModel
from homestead.domain.model import Chat
from homestead.domain.service import ChatService
from homestead.domain.value import PropertyId, UserId


class StartChatRequest(BaseModel):
    """Start chat request."""

    user_id: int
    other_user_id: int
    property_id: Optional[int] = None


class ChatItem(CamelModel):
    """Chat as returned to clients."""

    id: int
    user_a_id: int
    user_b_id: int
    property_id: Optional[int]
    created_at: datetime

    @classmethod
    def from_chat(cls, chat: Chat) -> "ChatItem":
        return cls(
            id=chat.id,
            user_a_id=chat.user_a_id,
            user_b_id=chat.user_b_id,
            property_id=chat.property_id,
            created_at=chat.created_at,
        )


class StartChatUseCase(BaseUseCase):
    """Use case for opening (or reopening) a chat with another user."""

    def __init__(self, chat_service: ChatService) -> None:
        """Initialize start chat use case.

        Args:
            chat_service: Chat domain service
        """
        self.chat_service = chat_service

    async def execute(self, request: StartChatRequest) -> ChatItem:
        """Execute start chat flow.

        Args:
            request: Current user, other participant and optional property

        Returns:
            The chat for this pair, created on first use
        """
        chat = await self.chat_service.start_chat(
            UserId(request.user_id),
            UserId(request.other_user_id),
            PropertyId(request.property_id) if request.property_id is not None else None,
        )
        return ChatItem.from_chat(chat)
