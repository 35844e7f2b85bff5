"""Realtime chat broker.

Owns the room directory for one application instance and fans persisted
messages and typing signals out to subscribed connections.
"""

import asyncio
import itertools
from collections import Counter
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any

import logfire
from dishka import AsyncContainer
from pydantic import ValidationError as PydanticValidationError

from homestead.application.usecase.chat import MessageItem
from homestead.config import RealtimeSettings
from homestead.domain.error import ForbiddenError, NotFoundError, ValidationError
from homestead.domain.model import Message
from homestead.domain.service import ChatService
from homestead.domain.value import ChatId, Principal

from . import events
from .connection import Connection, Sink
from .outcome import Delivered, DropReason, Dropped, Joined, Left, Outcome


@dataclass
class _ChatLock:
    """Per-chat publish lock and the number of publishes holding or awaiting it."""

    lock: asyncio.Lock = field(default_factory=asyncio.Lock)
    users: int = 0


class ChatBroker:
    """Room directory and message fan-out.

    Every chat-touching operation opens its own request scope on the DI
    container, so each publish is persisted and committed in its own
    transaction before it is fanned out.

    Ordering: publishes to one chat hold that chat's lock across
    persistence and enqueue, so every subscriber sees a chat's messages in
    the order they were stored. Different chats never wait on each other.
    A chat's lock only exists while a publish to it is in flight.
    """

    def __init__(
        self, container: AsyncContainer, outbound_queue_size: int | None = None
    ) -> None:
        """Initialize broker.

        Args:
            container: Application DI container
            outbound_queue_size: Per-connection outbound queue bound; read from
                ``RealtimeSettings`` on first connect when not given
        """
        self.container = container
        self.outbound_queue_size = outbound_queue_size
        self.rooms: dict[ChatId, set[Connection]] = {}
        self.memberships: dict[Connection, set[ChatId]] = {}
        self.drop_counts: Counter[DropReason] = Counter()
        self._locks: dict[ChatId, _ChatLock] = {}
        self._connection_ids = itertools.count(1)

    # ------------------------------------------------------------------
    # Connections
    # ------------------------------------------------------------------

    async def connect(self, principal: Principal, sink: Sink) -> Connection:
        """Register an authenticated connection and start its writer."""
        if self.outbound_queue_size is None:
            settings = await self.container.get(RealtimeSettings)
            self.outbound_queue_size = settings.outbound_queue_size
        connection = Connection(
            next(self._connection_ids), principal, sink, self.outbound_queue_size
        )
        self.memberships[connection] = set()
        connection.start()
        logfire.info(
            "Realtime connected",
            connection_id=connection.id,
            user_id=principal.user_id,
        )
        return connection

    async def disconnect(self, connection: Connection) -> None:
        """Remove the connection from every room and stop its writer."""
        chat_ids = self.memberships.pop(connection, set())
        for chat_id in chat_ids:
            self._remove_from_room(connection, chat_id)
        await connection.close()
        logfire.info(
            "Realtime disconnected",
            connection_id=connection.id,
            user_id=connection.principal.user_id,
            rooms_left=len(chat_ids),
        )

    async def close(self) -> None:
        """Disconnect everyone. Called on application shutdown."""
        for connection in list(self.memberships):
            await self.disconnect(connection)

    # ------------------------------------------------------------------
    # Rooms
    # ------------------------------------------------------------------

    async def join(self, connection: Connection, chat_id: ChatId) -> Joined | Dropped:
        """Subscribe a connection to a chat it takes part in.

        An unknown chat and a chat of other users are refused the same way.
        """
        user_id = connection.principal.user_id
        with logfire.span("chat_broker.join", chat_id=chat_id, user_id=user_id):
            async with self.container() as scope:
                chat_service = await scope.get(ChatService)
                chat = await chat_service.find_chat_for_participant(chat_id, user_id)

            if chat is None:
                return self._drop(DropReason.NOT_PARTICIPANT, chat_id, user_id)

            # Disconnected while the lookup was in flight
            rooms = self.memberships.get(connection)
            if rooms is None:
                return self._drop(DropReason.DISCONNECTED, chat_id, user_id)

            rooms.add(chat_id)
            self.rooms.setdefault(chat_id, set()).add(connection)
            logfire.info("Room joined", chat_id=chat_id, user_id=user_id)
            return Joined(chat_id=chat_id)

    def leave(self, connection: Connection, chat_id: ChatId) -> Left | Dropped:
        """Unsubscribe a connection from one chat."""
        rooms = self.memberships.get(connection, set())
        if chat_id not in rooms:
            return self._drop(
                DropReason.NOT_IN_ROOM, chat_id, connection.principal.user_id
            )
        rooms.discard(chat_id)
        self._remove_from_room(connection, chat_id)
        return Left(chat_id=chat_id)

    def _remove_from_room(self, connection: Connection, chat_id: ChatId) -> None:
        room = self.rooms.get(chat_id)
        if room is None:
            return
        room.discard(connection)
        if not room:
            del self.rooms[chat_id]

    def subscribers(self, chat_id: ChatId) -> set[Connection]:
        """Connections currently subscribed to a chat."""
        return set(self.rooms.get(chat_id, ()))

    # ------------------------------------------------------------------
    # Publishing
    # ------------------------------------------------------------------

    async def publish(
        self, connection: Connection, chat_id: ChatId, content: str
    ) -> Message | Dropped:
        """Persist a message and fan it out to the chat's room.

        Participancy is checked against the store on every publish; room
        membership alone is not enough. The publisher does not need to have
        joined the room.

        Returns:
            The persisted message, or why it was dropped
        """
        user_id = connection.principal.user_id
        if not content.strip():
            return self._drop(DropReason.EMPTY_CONTENT, chat_id, user_id)

        with logfire.span("chat_broker.publish", chat_id=chat_id, user_id=user_id):
            async with self._chat_lock(chat_id):
                try:
                    async with self.container() as scope:
                        chat_service = await scope.get(ChatService)
                        message = await chat_service.post_message(
                            chat_id, user_id, content
                        )
                except ValidationError:
                    return self._drop(DropReason.EMPTY_CONTENT, chat_id, user_id)
                except (NotFoundError, ForbiddenError):
                    return self._drop(DropReason.NOT_PARTICIPANT, chat_id, user_id)

                # The request scope has exited, so the message is committed.
                recipients = self._fan_out(
                    chat_id, events.message_new(MessageItem.from_message(message))
                )

            logfire.info(
                "Message published",
                chat_id=chat_id,
                message_id=message.id,
                recipients=recipients,
            )
            return message

    def publish_typing(
        self, connection: Connection, chat_id: ChatId, is_typing: bool
    ) -> Delivered | Dropped:
        """Broadcast a typing signal to a room the connection has joined.

        Nothing is persisted and participancy is not re-checked.
        """
        user_id = connection.principal.user_id
        if chat_id not in self.memberships.get(connection, ()):
            return self._drop(DropReason.NOT_IN_ROOM, chat_id, user_id)

        recipients = self._fan_out(
            chat_id, events.typing_event(chat_id, user_id, is_typing)
        )
        return Delivered(chat_id=chat_id, recipients=recipients)

    @asynccontextmanager
    async def _chat_lock(self, chat_id: ChatId) -> AsyncIterator[None]:
        entry = self._locks.get(chat_id)
        if entry is None:
            entry = self._locks[chat_id] = _ChatLock()
        entry.users += 1
        try:
            async with entry.lock:
                yield
        finally:
            entry.users -= 1
            if entry.users == 0:
                del self._locks[chat_id]

    def _fan_out(self, chat_id: ChatId, event: dict[str, Any]) -> int:
        delivered = 0
        for subscriber in list(self.rooms.get(chat_id, ())):
            if subscriber.offer(event):
                delivered += 1
            else:
                self._drop(
                    DropReason.SUBSCRIBER_BACKLOG,
                    chat_id,
                    subscriber.principal.user_id,
                    event=event["event"],
                )
        return delivered

    def _drop(
        self, reason: DropReason, chat_id: int | None, user_id: int, **context: Any
    ) -> Dropped:
        self.drop_counts[reason] += 1
        logfire.warn(
            "Realtime event dropped",
            reason=reason.value,
            chat_id=chat_id,
            user_id=user_id,
            **context,
        )
        return Dropped(reason=reason, chat_id=chat_id)

    # ------------------------------------------------------------------
    # Frames
    # ------------------------------------------------------------------

    async def handle_frame(
        self, connection: Connection, raw: str | bytes | dict[str, Any] | None
    ) -> Outcome | Message:
        """Dispatch one inbound frame.

        Malformed frames and unknown events are dropped, never raised. Any
        other failure (the database being unreachable, say) is logged and
        dropped as well, so the socket stays open.
        """
        user_id = connection.principal.user_id
        try:
            event, payload = events.parse_frame(raw)
        except (PydanticValidationError, ValueError) as e:
            return self._drop(DropReason.MALFORMED, None, user_id, error=str(e))

        chat_id = ChatId(payload.chat_id)
        try:
            return await self._dispatch(connection, event, payload, chat_id)
        except Exception as e:
            logfire.exception(
                "Realtime frame failed", event=event, chat_id=chat_id, user_id=user_id
            )
            return self._drop(
                DropReason.UNEXPECTED, chat_id, user_id, error=type(e).__name__
            )

    async def _dispatch(
        self, connection: Connection, event: str, payload: Any, chat_id: ChatId
    ) -> Outcome | Message:
        if event == events.CHAT_JOIN:
            return await self.join(connection, chat_id)
        if event == events.CHAT_LEAVE:
            return self.leave(connection, chat_id)
        if event == events.MESSAGE_SEND:
            return await self.publish(connection, chat_id, payload.content)
        return self.publish_typing(connection, chat_id, payload.is_typing)
