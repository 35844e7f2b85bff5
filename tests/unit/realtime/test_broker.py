"""Unit tests for the realtime ChatBroker."""

import asyncio
import json

import pytest
import pytest_asyncio

from homestead.domain.model import Message
from homestead.domain.service import ChatService
from homestead.domain.value import ChatId, Principal, UserId
from homestead.persistence.repository.inmemory import (
    InMemoryMessageRepository,
    InMemoryUserRepository,
)
from homestead.realtime import ChatBroker, Delivered, Dropped, Joined, Left
from homestead.realtime.outcome import DropReason
from tests.conftest import make_user
from tests.harness import create_container_fixture

# The broker opens its own request scopes, so it gets the root container
app_container = create_container_fixture()


class RecordingSink:
    """Collects events written to a connection."""

    def __init__(self) -> None:
        self.events: list[dict] = []

    async def __call__(self, event: dict) -> None:
        self.events.append(event)

    def of(self, kind: str) -> list[dict]:
        return [e for e in self.events if e["event"] == kind]


@pytest_asyncio.fixture
async def chat_id(app_container) -> ChatId:
    """A chat between users 1 and 2; user 3 exists but is not part of it."""
    users = await app_container.get(InMemoryUserRepository)
    for user_id in (1, 2, 3):
        users.add(make_user(user_id))
    async with app_container() as scope:
        chat_service = await scope.get(ChatService)
        chat = await chat_service.start_chat(UserId(1), UserId(2))
    return chat.id


@pytest_asyncio.fixture
async def broker(app_container):
    broker = ChatBroker(app_container)
    yield broker
    await broker.close()


async def connect(broker: ChatBroker, user_id: int):
    sink = RecordingSink()
    connection = await broker.connect(Principal(user_id=UserId(user_id)), sink)
    return connection, sink


class TestRooms:
    """Joining and leaving chat rooms."""

    @pytest.mark.asyncio
    async def test_queue_size_read_from_settings(self, broker):
        connection, _ = await connect(broker, 1)

        assert connection.queue.maxsize == 100

    @pytest.mark.asyncio
    async def test_participant_joins(self, broker, chat_id):
        connection, _ = await connect(broker, 1)

        outcome = await broker.join(connection, chat_id)

        assert outcome == Joined(chat_id=chat_id)
        assert broker.subscribers(chat_id) == {connection}

    @pytest.mark.asyncio
    async def test_non_participant_join_dropped(self, broker, chat_id):
        connection, _ = await connect(broker, 3)

        outcome = await broker.join(connection, chat_id)

        assert outcome == Dropped(reason=DropReason.NOT_PARTICIPANT, chat_id=chat_id)
        assert broker.subscribers(chat_id) == set()
        assert broker.drop_counts[DropReason.NOT_PARTICIPANT] == 1

    @pytest.mark.asyncio
    async def test_unknown_chat_join_dropped(self, broker, chat_id):
        connection, _ = await connect(broker, 1)

        outcome = await broker.join(connection, ChatId(404))

        assert isinstance(outcome, Dropped)
        assert outcome.reason == DropReason.NOT_PARTICIPANT

    @pytest.mark.asyncio
    async def test_leave(self, broker, chat_id):
        connection, _ = await connect(broker, 1)
        await broker.join(connection, chat_id)

        assert broker.leave(connection, chat_id) == Left(chat_id=chat_id)
        assert broker.subscribers(chat_id) == set()

        again = broker.leave(connection, chat_id)
        assert isinstance(again, Dropped)
        assert again.reason == DropReason.NOT_IN_ROOM

    @pytest.mark.asyncio
    async def test_disconnect_leaves_every_room(self, broker, chat_id):
        connection, _ = await connect(broker, 1)
        await broker.join(connection, chat_id)

        await broker.disconnect(connection)

        assert broker.subscribers(chat_id) == set()
        assert connection not in broker.memberships

    @pytest.mark.asyncio
    async def test_disconnected_connection_receives_nothing(self, broker, chat_id):
        gone, gone_sink = await connect(broker, 1)
        listener, listener_sink = await connect(broker, 1)
        bob, _ = await connect(broker, 2)
        await broker.join(gone, chat_id)
        await broker.join(listener, chat_id)

        await broker.disconnect(gone)
        message = await broker.publish(bob, chat_id, "are you there?")

        assert isinstance(message, Message)
        await listener.queue.join()
        assert [e["data"]["id"] for e in listener_sink.of("message:new")] == [
            message.id
        ]
        assert gone_sink.events == []
        assert gone.queue.empty()

    @pytest.mark.asyncio
    async def test_join_finishing_after_disconnect_is_dropped(
        self, broker, chat_id, monkeypatch
    ):
        lookup = ChatService.find_chat_for_participant
        release = asyncio.Event()

        async def slow_lookup(self, *args):
            await release.wait()
            return await lookup(self, *args)

        monkeypatch.setattr(ChatService, "find_chat_for_participant", slow_lookup)
        connection, _ = await connect(broker, 1)

        pending = asyncio.create_task(broker.join(connection, chat_id))
        await asyncio.sleep(0.01)
        await broker.disconnect(connection)
        release.set()
        outcome = await pending

        assert outcome == Dropped(reason=DropReason.DISCONNECTED, chat_id=chat_id)
        assert broker.subscribers(chat_id) == set()
        assert connection not in broker.memberships

    @pytest.mark.asyncio
    async def test_connection_ids_allocated_per_broker(self, app_container):
        first_broker = ChatBroker(app_container, outbound_queue_size=1)
        second_broker = ChatBroker(app_container, outbound_queue_size=1)

        a, _ = await connect(first_broker, 1)
        b, _ = await connect(first_broker, 2)
        c, _ = await connect(second_broker, 1)

        assert (a.id, b.id, c.id) == (1, 2, 1)
        await first_broker.close()
        await second_broker.close()


class TestPublish:
    """Persisting and fanning out messages."""

    @pytest.mark.asyncio
    async def test_message_reaches_every_subscriber(self, broker, app_container, chat_id):
        alice, alice_sink = await connect(broker, 1)
        bob, bob_sink = await connect(broker, 2)
        await broker.join(alice, chat_id)
        await broker.join(bob, chat_id)

        message = await broker.publish(alice, chat_id, "  hello bob ")

        assert isinstance(message, Message)
        await alice.queue.join()
        await bob.queue.join()
        for sink in (alice_sink, bob_sink):
            [event] = sink.of("message:new")
            assert event["data"]["id"] == message.id
            assert event["data"]["chatId"] == chat_id
            assert event["data"]["senderId"] == 1
            assert event["data"]["content"] == "hello bob"
            assert "sentAt" in event["data"]

        stored = await (await app_container.get(InMemoryMessageRepository)).find_by_chat(
            chat_id
        )
        assert [m.id for m in stored] == [message.id]

    @pytest.mark.asyncio
    async def test_publisher_need_not_join(self, broker, chat_id):
        """Participancy is checked against the store, not room membership."""
        sender, _ = await connect(broker, 2)
        listener, listener_sink = await connect(broker, 1)
        await broker.join(listener, chat_id)

        message = await broker.publish(sender, chat_id, "hi")

        assert isinstance(message, Message)
        await listener.queue.join()
        assert len(listener_sink.of("message:new")) == 1

    @pytest.mark.asyncio
    async def test_blank_content_dropped(self, broker, app_container, chat_id):
        connection, _ = await connect(broker, 1)

        outcome = await broker.publish(connection, chat_id, " \n\t ")

        assert isinstance(outcome, Dropped)
        assert outcome.reason == DropReason.EMPTY_CONTENT
        messages = await app_container.get(InMemoryMessageRepository)
        assert await messages.find_by_chat(chat_id) == []

    @pytest.mark.asyncio
    async def test_non_participant_publish_dropped(self, broker, app_container, chat_id):
        intruder, _ = await connect(broker, 3)
        listener, listener_sink = await connect(broker, 1)
        await broker.join(listener, chat_id)

        outcome = await broker.publish(intruder, chat_id, "hello?")

        assert isinstance(outcome, Dropped)
        assert outcome.reason == DropReason.NOT_PARTICIPANT
        await listener.queue.join()
        assert listener_sink.events == []
        messages = await app_container.get(InMemoryMessageRepository)
        assert await messages.find_by_chat(chat_id) == []

    @pytest.mark.asyncio
    async def test_concurrent_publishes_arrive_in_stored_order(self, broker, chat_id):
        alice, _ = await connect(broker, 1)
        bob, bob_sink = await connect(broker, 2)
        await broker.join(bob, chat_id)

        sent = await asyncio.gather(
            *(broker.publish(alice, chat_id, f"message {i}") for i in range(20))
        )

        await bob.queue.join()
        received = [e["data"]["id"] for e in bob_sink.of("message:new")]
        assert received == sorted(m.id for m in sent)
        assert broker._locks == {}

    @pytest.mark.asyncio
    async def test_slow_subscriber_only_drops_for_itself(self, app_container, chat_id):
        broker = ChatBroker(app_container, outbound_queue_size=1)
        release = asyncio.Event()

        async def stuck_sink(event: dict) -> None:
            await release.wait()

        slow = await broker.connect(Principal(user_id=UserId(2)), stuck_sink)
        fast, fast_sink = await connect(broker, 1)
        await broker.join(slow, chat_id)
        await broker.join(fast, chat_id)

        for i in range(3):
            outcome = await broker.publish(fast, chat_id, f"message {i}")
            assert isinstance(outcome, Message)
            for _ in range(3):
                await asyncio.sleep(0)

        await fast.queue.join()
        assert len(fast_sink.of("message:new")) == 3
        assert broker.drop_counts[DropReason.SUBSCRIBER_BACKLOG] >= 1

        release.set()
        await broker.close()


class TestTyping:
    """Typing signals."""

    @pytest.mark.asyncio
    async def test_typing_broadcast_to_room(self, broker, chat_id):
        alice, alice_sink = await connect(broker, 1)
        bob, bob_sink = await connect(broker, 2)
        await broker.join(alice, chat_id)
        await broker.join(bob, chat_id)

        outcome = broker.publish_typing(alice, chat_id, True)

        assert outcome == Delivered(chat_id=chat_id, recipients=2)
        await bob.queue.join()
        [event] = bob_sink.of("typing")
        assert event["data"] == {"chatId": chat_id, "userId": 1, "isTyping": True}

    @pytest.mark.asyncio
    async def test_typing_outside_room_dropped(self, broker, chat_id):
        alice, _ = await connect(broker, 1)

        outcome = broker.publish_typing(alice, chat_id, True)

        assert isinstance(outcome, Dropped)
        assert outcome.reason == DropReason.NOT_IN_ROOM


class TestFrames:
    """Dispatching raw inbound frames."""

    @pytest.mark.asyncio
    async def test_join_then_send_frames(self, broker, chat_id):
        alice, alice_sink = await connect(broker, 1)

        joined = await broker.handle_frame(
            alice, json.dumps({"event": "chat:join", "data": {"chatId": chat_id}})
        )
        sent = await broker.handle_frame(
            alice,
            {"event": "message:send", "data": {"chatId": chat_id, "content": "hey"}},
        )

        assert joined == Joined(chat_id=chat_id)
        assert isinstance(sent, Message)
        await alice.queue.join()
        assert alice_sink.of("message:new")[0]["data"]["content"] == "hey"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "raw",
        [
            "not json",
            json.dumps({"event": "chat:explode", "data": {"chatId": 1}}),
            json.dumps({"event": "chat:join", "data": {}}),
            json.dumps({"event": "message:send", "data": {"chatId": "abc"}}),
            json.dumps({"data": {"chatId": 1}}),
        ],
    )
    async def test_malformed_frames_dropped(self, broker, chat_id, raw):
        alice, alice_sink = await connect(broker, 1)

        outcome = await broker.handle_frame(alice, raw)

        assert isinstance(outcome, Dropped)
        assert outcome.reason == DropReason.MALFORMED
        assert alice_sink.events == []

    @pytest.mark.asyncio
    async def test_binary_frame_accepted(self, broker, chat_id):
        alice, _ = await connect(broker, 1)

        outcome = await broker.handle_frame(
            alice, json.dumps({"event": "chat:join", "data": {"chatId": chat_id}}).encode()
        )

        assert outcome == Joined(chat_id=chat_id)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw", [b"\xff\xfe", None])
    async def test_undecodable_frames_dropped(self, broker, raw):
        alice, _ = await connect(broker, 1)

        outcome = await broker.handle_frame(alice, raw)

        assert isinstance(outcome, Dropped)
        assert outcome.reason == DropReason.MALFORMED

    @pytest.mark.asyncio
    async def test_unexpected_failure_dropped(self, broker, chat_id, monkeypatch):
        async def unavailable(self, *args, **kwargs):
            raise RuntimeError("db down")

        monkeypatch.setattr(ChatService, "post_message", unavailable)
        alice, alice_sink = await connect(broker, 1)
        await broker.join(alice, chat_id)

        outcome = await broker.handle_frame(
            alice,
            {"event": "message:send", "data": {"chatId": chat_id, "content": "hi"}},
        )

        assert outcome == Dropped(reason=DropReason.UNEXPECTED, chat_id=chat_id)
        assert broker.drop_counts[DropReason.UNEXPECTED] == 1
        assert broker._locks == {}

        typing = await broker.handle_frame(
            alice, {"event": "typing", "data": {"chatId": chat_id, "isTyping": True}}
        )
        assert typing == Delivered(chat_id=chat_id, recipients=1)
        await alice.queue.join()
        assert alice_sink.of("message:new") == []
