"""Message entity."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from homestead.domain.model.common import DomainModel, utcnow
from homestead.domain.value import ChatId, MessageContent, MessageId, UserId


class Message(DomainModel):
    """A chat message. Immutable once persisted.

    ``sent_at`` is the persistence timestamp; together with ``id`` it defines
    the delivery order within a chat.
    """

    id: Optional[MessageId] = None
    chat_id: ChatId
    sender_id: UserId
    content: MessageContent
    sent_at: datetime = Field(default_factory=utcnow)
