"""List messages use case."""

from pydantic import BaseModel

from homestead.application.usecase.base import BaseUseCase, CamelModel
from homestead.application.usecase.chat.send_message import MessageItem
from homestead.domain.service import ChatService
from homestead.domain.value import ChatId, UserId


class ListMessagesRequest(BaseModel):
    """List messages request."""

    chat_id: int
    user_id: int


class ListMessagesResponse(CamelModel):
    """A chat's messages, oldest first."""

    messages: list[MessageItem]


class ListMessagesUseCase(BaseUseCase):
    """Use case for reading a chat's history."""

    def __init__(self, chat_service: ChatService) -> None:
        self.chat_service = chat_service

    async def execute(self, request: ListMessagesRequest) -> ListMessagesResponse:
        messages = await self.chat_service.list_messages(
            ChatId(request.chat_id), UserId(request.user_id)
        )
        return ListMessagesResponse(
            messages=[MessageItem.from_message(m) for m in messages]
        )
