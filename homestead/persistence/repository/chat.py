"""PostgreSQL implementations of the chat and message repositories."""

from typing import Optional

from sqlalchemy import and_, insert, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from homestead.domain.model import Chat, Message
from homestead.domain.repository import ChatRepository, MessageRepository
from homestead.domain.value import ChatId, PropertyId, UserId
from homestead.persistence.mappers import (
    chat_to_dict,
    message_to_dict,
    row_to_chat,
    row_to_message,
)
from homestead.persistence.tables import chats_table, messages_table


class PostgresChatRepository(ChatRepository):
    """PostgreSQL implementation of ChatRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, chat_id: ChatId) -> Optional[Chat]:
        """Find a chat by ID.

        Args:
            chat_id: Chat ID to look up

        Returns:
            Chat if found, None otherwise
        """
        stmt = select(chats_table).where(chats_table.c.id == chat_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_chat(dict(row)) if row else None

    async def find_by_participants(
        self, user_a_id: UserId, user_b_id: UserId, property_id: PropertyId | None
    ) -> Optional[Chat]:
        """Find the chat for an ordered pair and optional property."""
        if property_id is None:
            property_clause = chats_table.c.property_id.is_(None)
        else:
            property_clause = chats_table.c.property_id == property_id

        stmt = select(chats_table).where(
            and_(
                chats_table.c.user_a_id == user_a_id,
                chats_table.c.user_b_id == user_b_id,
                property_clause,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_chat(dict(row)) if row else None

    async def find_for_user(self, user_id: UserId) -> list[Chat]:
        """List chats the user takes part in, newest first."""
        stmt = (
            select(chats_table)
            .where(
                or_(
                    chats_table.c.user_a_id == user_id,
                    chats_table.c.user_b_id == user_id,
                )
            )
            .order_by(chats_table.c.created_at.desc(), chats_table.c.id.desc())
        )
        result = await self.session.execute(stmt)
        rows = result.mappings().all()
        return [row_to_chat(dict(row)) for row in rows]

    async def save(self, chat: Chat) -> Chat:
        """Insert a new chat.

        The insert runs in a savepoint so a uniqueness violation leaves the
        surrounding transaction usable for the follow-up lookup.

        Raises:
            IntegrityError: If the pair (and property) already has a chat
        """
        stmt = (
            insert(chats_table)
            .values(**chat_to_dict(chat))
            .returning(*chats_table.c)
        )
        async with self.session.begin_nested():
            result = await self.session.execute(stmt)
            row = result.mappings().one()
        return row_to_chat(dict(row))


class PostgresMessageRepository(MessageRepository):
    """PostgreSQL implementation of MessageRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def save(self, message: Message) -> Message:
        """Append a message and return it with its assigned ID."""
        stmt = (
            insert(messages_table)
            .values(**message_to_dict(message))
            .returning(*messages_table.c)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().one()
        await self.session.flush()
        return row_to_message(dict(row))

    async def find_by_chat(self, chat_id: ChatId) -> list[Message]:
        """List a chat's messages, oldest first."""
        stmt = (
            select(messages_table)
            .where(messages_table.c.chat_id == chat_id)
            .order_by(messages_table.c.sent_at.asc(), messages_table.c.id.asc())
        )
        result = await self.session.execute(stmt)
        rows = result.mappings().all()
        return [row_to_message(dict(row)) for row in rows]
