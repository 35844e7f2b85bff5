"""Realtime wire frames.

Every frame in either direction is a JSON object
``{"event": <kind>, "data": {...}}``.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from homestead.application.usecase.chat import MessageItem

CHAT_JOIN = "chat:join"
CHAT_LEAVE = "chat:leave"
MESSAGE_SEND = "message:send"
MESSAGE_NEW = "message:new"
TYPING = "typing"


class Frame(BaseModel):
    """Envelope of an inbound frame."""

    event: str
    data: dict[str, Any] = {}


class _Payload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ChatRef(_Payload):
    """Payload of ``chat:join`` and ``chat:leave``."""

    chat_id: int


class SendMessage(_Payload):
    """Payload of ``message:send``."""

    chat_id: int
    content: str


class Typing(_Payload):
    """Payload of ``typing``."""

    chat_id: int
    is_typing: bool = False


INBOUND_PAYLOADS: dict[str, type[_Payload]] = {
    CHAT_JOIN: ChatRef,
    CHAT_LEAVE: ChatRef,
    MESSAGE_SEND: SendMessage,
    TYPING: Typing,
}


def parse_frame(raw: str | bytes | dict[str, Any]) -> tuple[str, _Payload]:
    """Validate an inbound frame (JSON text or decoded) and its payload.

    Raises:
        ValueError: If the event is unknown
        pydantic.ValidationError: If the envelope or payload is invalid
    """
    if isinstance(raw, (str, bytes)):
        frame = Frame.model_validate_json(raw)
    else:
        frame = Frame.model_validate(raw)
    payload_type = INBOUND_PAYLOADS.get(frame.event)
    if payload_type is None:
        raise ValueError(f"Unknown event: {frame.event}")
    return frame.event, payload_type.model_validate(frame.data)


def message_new(message: MessageItem) -> dict[str, Any]:
    """Build the ``message:new`` broadcast for a persisted message."""
    return {
        "event": MESSAGE_NEW,
        "data": message.model_dump(mode="json", by_alias=True),
    }


def typing_event(chat_id: int, user_id: int, is_typing: bool) -> dict[str, Any]:
    """Build the ``typing`` broadcast."""
    return {
        "event": TYPING,
        "data": {"chatId": chat_id, "userId": user_id, "isTyping": is_typing},
    }
