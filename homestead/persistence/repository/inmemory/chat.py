"""In-memory chat and message repositories for testing."""

from typing import Optional

from sqlalchemy.exc import IntegrityError

from homestead.domain.model.chat import Chat
from homestead.domain.model.message import Message
from homestead.domain.repository.chat import ChatRepository, MessageRepository
from homestead.domain.value import ChatId, MessageId, PropertyId, UserId


class InMemoryChatRepository(ChatRepository):
    """In-memory implementation of ChatRepository for testing."""

    def __init__(self) -> None:
        self._chats: dict[ChatId, Chat] = {}
        self._next_id = 1

    async def find_by_id(self, chat_id: ChatId) -> Optional[Chat]:
        """Find a chat by ID."""
        return self._chats.get(chat_id)

    async def find_by_participants(
        self, user_a_id: UserId, user_b_id: UserId, property_id: PropertyId | None
    ) -> Optional[Chat]:
        """Find the chat for an ordered pair and optional property."""
        for chat in self._chats.values():
            if (
                chat.user_a_id == user_a_id
                and chat.user_b_id == user_b_id
                and chat.property_id == property_id
            ):
                return chat
        return None

    async def find_for_user(self, user_id: UserId) -> list[Chat]:
        """List chats the user takes part in, newest first."""
        chats = [c for c in self._chats.values() if c.has_participant(user_id)]
        chats.sort(key=lambda c: (c.created_at, c.id), reverse=True)
        return chats

    async def save(self, chat: Chat) -> Chat:
        """Insert a new chat.

        Raises:
            IntegrityError: If the pair (and property) already has a chat
        """
        existing = await self.find_by_participants(
            chat.user_a_id, chat.user_b_id, chat.property_id
        )
        if existing:
            raise IntegrityError("Duplicate chat", None, Exception())

        saved = chat.model_copy(update={"id": ChatId(self._next_id)})
        self._next_id += 1
        self._chats[saved.id] = saved
        return saved


class InMemoryMessageRepository(MessageRepository):
    """In-memory implementation of MessageRepository for testing."""

    def __init__(self) -> None:
        self._messages: list[Message] = []

    async def save(self, message: Message) -> Message:
        """Append a message and assign it the next ID."""
        saved = message.model_copy(update={"id": MessageId(len(self._messages) + 1)})
        self._messages.append(saved)
        return saved

    async def find_by_chat(self, chat_id: ChatId) -> list[Message]:
        """List a chat's messages, oldest first."""
        messages = [m for m in self._messages if m.chat_id == chat_id]
        messages.sort(key=lambda m: (m.sent_at, m.id))
        return messages
