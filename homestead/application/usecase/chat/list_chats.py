"""List chats use case."""

from pydantic import BaseModel

from homestead.application.usecase.base import BaseUseCase, CamelModel
from homestead.application.usecase.chat.start_chat import ChatItem
from homestead.domain.service import ChatService
from homestead.domain.value import UserId


class ListChatsRequest(BaseModel):
    """List chats request."""

    user_id: int


class ListChatsResponse(CamelModel):
    """Chats of the current user, newest first."""

    chats: list[ChatItem]


class ListChatsUseCase(BaseUseCase):
    """Use case for listing the current user's chats."""

    def __init__(self, chat_service: ChatService) -> None:
        self.chat_service = chat_service

    async def execute(self, request: ListChatsRequest) -> ListChatsResponse:
        chats = await self.chat_service.list_chats(UserId(request.user_id))
        return ListChatsResponse(chats=[ChatItem.from_chat(c) for c in chats])
