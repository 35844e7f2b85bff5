"""Chat and message repository interfaces."""

from abc import ABC, abstractmethod

from homestead.domain.model import Chat, Message
from homestead.domain.value import ChatId, PropertyId, UserId


class ChatRepository(ABC):
    """Repository for Chat entity.

    Implementations must enforce uniqueness of the ordered pair (and the
    optional property) and raise ``IntegrityError`` on a duplicate insert.
    """

    @abstractmethod
    async def find_by_id(self, chat_id: ChatId) -> Chat | None:
        """Find a chat by ID."""
        pass

    @abstractmethod
    async def find_by_participants(
        self, user_a_id: UserId, user_b_id: UserId, property_id: PropertyId | None
    ) -> Chat | None:
        """Find the chat for an ordered pair and optional property.

        Args:
            user_a_id: Lower participant ID
            user_b_id: Higher participant ID
            property_id: Linked property, or None for the unscoped chat

        Returns:
            The chat if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_for_user(self, user_id: UserId) -> list[Chat]:
        """List chats the user takes part in, newest first."""
        pass

    @abstractmethod
    async def save(self, chat: Chat) -> Chat:
        """Insert a new chat and return it with its assigned ID.

        Raises:
            IntegrityError: If a chat already exists for the same key
        """
        pass


class MessageRepository(ABC):
    """Repository for Message entity."""

    @abstractmethod
    async def save(self, message: Message) -> Message:
        """Append a message and return it with its assigned ID."""
        pass

    @abstractmethod
    async def find_by_chat(self, chat_id: ChatId) -> list[Message]:
        """List a chat's messages in delivery order (sent_at, then id)."""
        pass
