"""Unit tests for realtime connections and wire frames."""

import asyncio
from datetime import UTC, datetime

import pytest
from pydantic import ValidationError

from homestead.application.usecase.chat import MessageItem
from homestead.domain.value import Principal, UserId
from homestead.realtime import Connection
from homestead.realtime.events import (
    CHAT_JOIN,
    MESSAGE_SEND,
    TYPING,
    ChatRef,
    SendMessage,
    Typing,
    message_new,
    parse_frame,
    typing_event,
)

ALICE = Principal(user_id=UserId(1))


class TestConnection:
    """Outbound queue and writer task."""

    @pytest.mark.asyncio
    async def test_writer_delivers_in_order(self):
        written = []

        async def sink(event):
            written.append(event)

        connection = Connection(1, ALICE, sink, queue_size=10)
        connection.start()
        for n in range(3):
            assert connection.offer({"n": n})

        await connection.queue.join()
        await connection.close()

        assert written == [{"n": 0}, {"n": 1}, {"n": 2}]

    @pytest.mark.asyncio
    async def test_full_queue_refuses_events(self):
        async def sink(event):
            pass

        # Writer not started, so nothing drains
        connection = Connection(1, ALICE, sink, queue_size=2)

        assert connection.offer({"n": 0})
        assert connection.offer({"n": 1})
        assert not connection.offer({"n": 2})
        assert connection.queue.qsize() == 2

    @pytest.mark.asyncio
    async def test_failing_sink_stops_writer(self):
        calls = 0

        async def sink(event):
            nonlocal calls
            calls += 1
            raise RuntimeError("socket closed")

        connection = Connection(1, ALICE, sink, queue_size=10)
        connection.start()
        connection.offer({"n": 0})
        connection.offer({"n": 1})
        await asyncio.sleep(0.05)

        assert calls == 1
        await connection.close()
        await connection.close()

    def test_repr(self):
        async def sink(event):
            pass

        connection = Connection(7, ALICE, sink, queue_size=1)

        assert repr(connection) == "Connection(id=7, user_id=1)"


class TestFrames:
    """Parsing inbound frames and building outbound ones."""

    def test_parse_camel_case_payload(self):
        event, payload = parse_frame(
            '{"event": "message:send", "data": {"chatId": 5, "content": "hi"}}'
        )

        assert event == MESSAGE_SEND
        assert isinstance(payload, SendMessage)
        assert payload.chat_id == 5
        assert payload.content == "hi"

    def test_parse_snake_case_payload(self):
        event, payload = parse_frame(
            {"event": "typing", "data": {"chat_id": 5, "is_typing": True}}
        )

        assert event == TYPING
        assert isinstance(payload, Typing)
        assert payload.is_typing is True

    def test_parse_join(self):
        event, payload = parse_frame({"event": "chat:join", "data": {"chatId": 7}})

        assert event == CHAT_JOIN
        assert isinstance(payload, ChatRef)
        assert payload.chat_id == 7

    def test_unknown_event(self):
        with pytest.raises(ValueError, match="Unknown event"):
            parse_frame({"event": "chat:delete", "data": {}})

    def test_invalid_json(self):
        with pytest.raises(ValidationError):
            parse_frame("not json")

    def test_missing_payload_field(self):
        with pytest.raises(ValidationError):
            parse_frame({"event": "message:send", "data": {"chatId": 5}})

    def test_message_new_shape(self):
        item = MessageItem(
            id=3,
            chat_id=5,
            sender_id=2,
            content="hello",
            sent_at=datetime(2026, 1, 1, tzinfo=UTC),
        )

        assert message_new(item) == {
            "event": "message:new",
            "data": {
                "id": 3,
                "chatId": 5,
                "senderId": 2,
                "content": "hello",
                "sentAt": "2026-01-01T00:00:00Z",
            },
        }

    def test_typing_event_shape(self):
        assert typing_event(5, 1, False) == {
            "event": "typing",
            "data": {"chatId": 5, "userId": 1, "isTyping": False},
        }
