"""Chat routes."""

from typing import Optional

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Header, status

from homestead.application.usecase.base import CamelModel
from homestead.application.usecase.chat import (
    ChatItem,
    ListChatsRequest,
    ListChatsResponse,
    ListChatsUseCase,
    ListMessagesRequest,
    ListMessagesResponse,
    ListMessagesUseCase,
    MessageItem,
    SendMessageRequest,
    SendMessageUseCase,
    StartChatRequest,
    StartChatUseCase,
)
from homestead.domain.service import JWTService
from homestead.interface.api.auth import require_principal

router = APIRouter(prefix="/chats", tags=["chats"], route_class=DishkaRoute)


class StartChatAPIRequest(CamelModel):
    """API request for starting a chat."""

    other_user_id: int
    property_id: Optional[int] = None


class SendMessageAPIRequest(CamelModel):
    """API request for sending a message."""

    content: str


@router.post("", response_model=ChatItem, status_code=status.HTTP_201_CREATED)
async def start_chat(
    request: StartChatAPIRequest,
    start_chat_use_case: FromDishka[StartChatUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> ChatItem:
    """Open a chat with another user, or return the existing one.

    Args:
        request: Other participant and optional property
        start_chat_use_case: Start chat use case from DI
        jwt_service: JWT service from DI
        authorization: Bearer token header
        auth_token: JWT token from cookie

    Returns:
        The chat for this pair
    """
    principal = require_principal(jwt_service, authorization, auth_token)
    return await start_chat_use_case.execute(
        StartChatRequest(
            user_id=principal.user_id,
            other_user_id=request.other_user_id,
            property_id=request.property_id,
        )
    )


@router.get("", response_model=ListChatsResponse)
async def list_chats(
    list_chats_use_case: FromDishka[ListChatsUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> ListChatsResponse:
    """List the current user's chats, newest first."""
    principal = require_principal(jwt_service, authorization, auth_token)
    return await list_chats_use_case.execute(
        ListChatsRequest(user_id=principal.user_id)
    )


@router.get("/{chat_id}/messages", response_model=ListMessagesResponse)
async def list_messages(
    chat_id: int,
    list_messages_use_case: FromDishka[ListMessagesUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> ListMessagesResponse:
    """List a chat's messages, oldest first. Participants only."""
    principal = require_principal(jwt_service, authorization, auth_token)
    return await list_messages_use_case.execute(
        ListMessagesRequest(chat_id=chat_id, user_id=principal.user_id)
    )


@router.post(
    "/{chat_id}/messages",
    response_model=MessageItem,
    status_code=status.HTTP_201_CREATED,
)
async def send_message(
    chat_id: int,
    request: SendMessageAPIRequest,
    send_message_use_case: FromDishka[SendMessageUseCase],
    jwt_service: FromDishka[JWTService],
    authorization: str | None = Header(default=None),
    auth_token: str | None = Cookie(default=None),
) -> MessageItem:
    """Post a message to a chat.

    Messages sent here are stored but not pushed to realtime subscribers;
    clients see them on their next history fetch.
    """
    principal = require_principal(jwt_service, authorization, auth_token)
    return await send_message_use_case.execute(
        SendMessageRequest(
            chat_id=chat_id, user_id=principal.user_id, content=request.content
        )
    )
