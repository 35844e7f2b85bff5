"""Send message use case (request/response path)."""

from datetime import datetime

from pydantic import BaseModel

from homestead.application.usecase.base import BaseUseCase, CamelModel
from homestead.domain.model import Message
from homestead.domain.service import ChatService
from homestead.domain.value import ChatId, UserId


class SendMessageRequest(BaseModel):
    """Send message request."""

    chat_id: int
    user_id: int
    content: str


class MessageItem(CamelModel):
    """Message as returned to clients and broadcast as ``message:new``."""

    id: int
    chat_id: int
    sender_id: int
    content: str
    sent_at: datetime

    @classmethod
    def from_message(cls, message: Message) -> "MessageItem":
        return cls(
            id=message.id,
            chat_id=message.chat_id,
            sender_id=message.sender_id,
            content=message.content.root,
            sent_at=message.sent_at,
        )


class SendMessageUseCase(BaseUseCase):
    """Use case for posting a message over HTTP.

    Unlike the realtime channel, failures here are raised to the caller.
    """

    def __init__(self, chat_service: ChatService) -> None:
        """Initialize send message use case.

        Args:
            chat_service: Chat domain service
        """
        self.chat_service = chat_service

    async def execute(self, request: SendMessageRequest) -> MessageItem:
        """Execute send message flow.

        Raises:
            ValidationError: If the content is blank
            NotFoundError: If the chat does not exist
            ForbiddenError: If the user is not a participant
        """
        message = await self.chat_service.post_message(
            ChatId(request.chat_id), UserId(request.user_id), request.content
        )
        return MessageItem.from_message(message)
