"""Chat use cases."""

from homestead.application.usecase.chat.list_chats import (
    ListChatsRequest,
    ListChatsResponse,
    ListChatsUseCase,
)
from homestead.application.usecase.chat.list_messages import (
    ListMessagesRequest,
    ListMessagesResponse,
    ListMessagesUseCase,
)
from homestead.application.usecase.chat.send_message import (
    MessageItem,
    SendMessageRequest,
    SendMessageUseCase,
)
from homestead.application.usecase.chat.start_chat import (
    ChatItem,
    StartChatRequest,
    StartChatUseCase,
)

__all__ = [
    "ChatItem",
    "ListChatsRequest",
    "ListChatsResponse",
    "ListChatsUseCase",
    "ListMessagesRequest",
    "ListMessagesResponse",
    "ListMessagesUseCase",
    "MessageItem",
    "SendMessageRequest",
    "SendMessageUseCase",
    "StartChatRequest",
    "StartChatUseCase",
]
