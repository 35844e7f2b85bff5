"""Chat domain service."""

import logfire
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError

from homestead.domain.error import (
    ForbiddenError,
    NotFoundError,
    UnexpectedError,
    ValidationError,
)
from homestead.domain.model import Chat, Message
from homestead.domain.repository import (
    ChatRepository,
    MessageRepository,
    PropertyRepository,
    UserRepository,
)
from homestead.domain.value import ChatId, MessageContent, PropertyId, UserId

from .base import Service


class ChatService(Service):
    """Domain service for two-party chats and their messages."""

    def __init__(
        self,
        chat_repository: ChatRepository,
        message_repository: MessageRepository,
        user_repository: UserRepository,
        property_repository: PropertyRepository,
    ) -> None:
        """Initialize chat service.

        Args:
            chat_repository: Chat repository
            message_repository: Message repository
            user_repository: User repository
            property_repository: Property repository
        """
        self.chat_repository = chat_repository
        self.message_repository = message_repository
        self.user_repository = user_repository
        self.property_repository = property_repository

    async def start_chat(
        self,
        user_id: UserId,
        other_user_id: UserId,
        property_id: PropertyId | None = None,
    ) -> Chat:
        """Create the chat between two users, or return the existing one.

        The pair is stored in ascending order, so either user starting the
        chat lands on the same row. A concurrent creator that wins the insert
        race shows up as a uniqueness violation, after which the winner's row
        is fetched and returned.

        Args:
            user_id: User starting the chat
            other_user_id: The other participant
            property_id: Optional property the chat is about

        Returns:
            The chat for this pair and property

        Raises:
            ValidationError: If the user tries to chat with themselves
            NotFoundError: If the other user or the property does not exist
        """
        with logfire.span(
            "chat_service.start_chat",
            user_id=user_id,
            other_user_id=other_user_id,
            property_id=property_id,
        ):
            if user_id == other_user_id:
                raise ValidationError("Cannot chat with yourself", field="otherUserId")

            if await self.user_repository.find_by_id(other_user_id) is None:
                raise NotFoundError("User", other_user_id)

            if property_id is not None:
                if await self.property_repository.find_by_id(property_id) is None:
                    raise NotFoundError("Property", property_id)

            candidate = Chat.between(user_id, other_user_id, property_id)

            existing = await self.chat_repository.find_by_participants(
                candidate.user_a_id, candidate.user_b_id, property_id
            )
            if existing:
                logfire.info("Existing chat returned", chat_id=existing.id)
                return existing

            try:
                chat = await self.chat_repository.save(candidate)
            except IntegrityError:
                logfire.info(
                    "Concurrent chat creation, re-fetching",
                    user_a_id=candidate.user_a_id,
                    user_b_id=candidate.user_b_id,
                )
                chat = await self.chat_repository.find_by_participants(
                    candidate.user_a_id, candidate.user_b_id, property_id
                )
                if chat is None:
                    raise UnexpectedError("Failed to create chat")
                return chat

            logfire.info("Chat created", chat_id=chat.id)
            return chat

    async def list_chats(self, user_id: UserId) -> list[Chat]:
        """List chats the user takes part in, newest first."""
        with logfire.span("chat_service.list_chats", user_id=user_id):
            chats = await self.chat_repository.find_for_user(user_id)
            logfire.info("Chats listed", user_id=user_id, count=len(chats))
            return chats

    async def get_chat_for_participant(self, chat_id: ChatId, user_id: UserId) -> Chat:
        """Load a chat the user takes part in.

        Raises:
            NotFoundError: If the chat does not exist
            ForbiddenError: If the user is not a participant
        """
        chat = await self.chat_repository.find_by_id(chat_id)
        if chat is None:
            raise NotFoundError("Chat", chat_id)
        if not chat.has_participant(user_id):
            raise ForbiddenError("chat", chat_id, user_id)
        return chat

    async def find_chat_for_participant(
        self, chat_id: ChatId, user_id: UserId
    ) -> Chat | None:
        """Load a chat if the user takes part in it.

        An unknown chat and a chat of other users look the same to the
        caller, so chat existence does not leak to non-participants.
        """
        chat = await self.chat_repository.find_by_id(chat_id)
        if chat is None or not chat.has_participant(user_id):
            return None
        return chat

    async def list_messages(self, chat_id: ChatId, user_id: UserId) -> list[Message]:
        """List a chat's messages in delivery order.

        Raises:
            NotFoundError: If the chat does not exist
            ForbiddenError: If the user is not a participant
        """
        with logfire.span(
            "chat_service.list_messages", chat_id=chat_id, user_id=user_id
        ):
            await self.get_chat_for_participant(chat_id, user_id)
            return await self.message_repository.find_by_chat(chat_id)

    async def post_message(
        self, chat_id: ChatId, sender_id: UserId, content: str
    ) -> Message:
        """Persist a message from a chat participant.

        Participancy is checked on every call rather than trusted from
        an earlier room join.

        Args:
            chat_id: Target chat
            sender_id: Sending user
            content: Raw message text

        Returns:
            The persisted message with its ID and sent_at

        Raises:
            ValidationError: If the content is blank
            NotFoundError: If the chat does not exist
            ForbiddenError: If the sender is not a participant
        """
        with logfire.span(
            "chat_service.post_message", chat_id=chat_id, sender_id=sender_id
        ):
            try:
                message_content = MessageContent(content)
            except PydanticValidationError:
                raise ValidationError("Message content must not be empty", "content")

            await self.get_chat_for_participant(chat_id, sender_id)

            message = await self.message_repository.save(
                Message(chat_id=chat_id, sender_id=sender_id, content=message_content)
            )
            logfire.info(
                "Message persisted",
                chat_id=chat_id,
                message_id=message.id,
                sender_id=sender_id,
            )
            return message
