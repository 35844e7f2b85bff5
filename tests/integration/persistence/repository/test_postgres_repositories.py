"""Integration tests for the PostgreSQL repositories.

These tests need a migrated database (``alembic upgrade head``) and are
skipped unless ``DATABASE__URL`` is set. Every test rolls its writes back.
"""

import os
from dataclasses import dataclass
from datetime import timedelta
from uuid import uuid4

import pytest
import pytest_asyncio
from dishka import AsyncContainer
from sqlalchemy import insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from homestead.domain.model import Chat, Message, Rental, RentalInvite
from homestead.domain.model.common import utcnow
from homestead.domain.repository import (
    ChatRepository,
    InviteRepository,
    MessageRepository,
    RentalRepository,
)
from homestead.domain.value import (
    InviteCode,
    InviteStatus,
    MessageContent,
    PropertyId,
    UserId,
)
from homestead.persistence.tables import properties_table, users_table
from tests.harness import create_env_fixture

pytestmark = pytest.mark.skipif(
    not os.environ.get("DATABASE__URL"), reason="DATABASE__URL not set"
)

# Integration test fixture - real persistence
integration_env = create_env_fixture(unmock={"persistence"})


@dataclass
class Seeded:
    """Request container plus the rows seeded for a test."""

    env: AsyncContainer
    user_ids: list[UserId]
    property_id: PropertyId

    async def get(self, dependency):
        return await self.env.get(dependency)


@pytest_asyncio.fixture
async def db(integration_env):
    """Request container with two users and a property; rolled back afterwards."""
    session = await integration_env.get(AsyncSession)
    user_ids = []
    for name in ("owner", "renter"):
        result = await session.execute(
            insert(users_table)
            .values(name=name, email=f"{name}-{uuid4().hex}@example.com")
            .returning(users_table.c.id)
        )
        user_ids.append(UserId(result.scalar_one()))
    result = await session.execute(
        insert(properties_table)
        .values(owner_id=user_ids[0], title="Test flat")
        .returning(properties_table.c.id)
    )
    yield Seeded(integration_env, user_ids, PropertyId(result.scalar_one()))
    await session.rollback()


class TestChatRepositoryIntegration:
    """Chat uniqueness and message ordering against PostgreSQL."""

    @pytest.mark.asyncio
    async def test_duplicate_pair_rejected(self, db):
        chat_repo = await db.get(ChatRepository)
        owner, renter = db.user_ids

        chat = await chat_repo.save(Chat.between(owner, renter, None))
        with pytest.raises(IntegrityError):
            await chat_repo.save(Chat.between(renter, owner, None))

        found = await chat_repo.find_by_participants(
            chat.user_a_id, chat.user_b_id, None
        )
        assert found.id == chat.id

    @pytest.mark.asyncio
    async def test_property_chat_coexists_with_plain_chat(self, db):
        chat_repo = await db.get(ChatRepository)
        owner, renter = db.user_ids

        plain = await chat_repo.save(Chat.between(owner, renter, None))
        scoped = await chat_repo.save(Chat.between(owner, renter, db.property_id))

        assert plain.id != scoped.id
        chats = await chat_repo.find_for_user(renter)
        assert {c.id for c in chats} == {plain.id, scoped.id}

    @pytest.mark.asyncio
    async def test_messages_listed_in_order(self, db):
        chat_repo = await db.get(ChatRepository)
        message_repo = await db.get(MessageRepository)
        owner, renter = db.user_ids
        chat = await chat_repo.save(Chat.between(owner, renter, None))

        first = await message_repo.save(
            Message(chat_id=chat.id, sender_id=owner, content=MessageContent("one"))
        )
        second = await message_repo.save(
            Message(chat_id=chat.id, sender_id=renter, content=MessageContent("two"))
        )

        messages = await message_repo.find_by_chat(chat.id)
        assert [m.id for m in messages] == [first.id, second.id]
        assert messages[0].content.root == "one"


class TestInviteRepositoryIntegration:
    """Invite codes and the conditional accept against PostgreSQL."""

    async def _rental(self, db) -> Rental:
        rental_repo = await db.get(RentalRepository)
        now = utcnow()
        return await rental_repo.save(
            Rental(
                property_id=db.property_id,
                start_date=now,
                next_due_date=now + timedelta(days=30),
                rent_amount=900,
            )
        )

    def _invite(self, rental: Rental, inviter_id: UserId, code: str) -> RentalInvite:
        return RentalInvite(
            rental_id=rental.id,
            code=InviteCode(code),
            inviter_id=inviter_id,
            expires_at=utcnow() + timedelta(days=7),
        )

    @pytest.mark.asyncio
    async def test_find_by_code_and_collision(self, db):
        invite_repo = await db.get(InviteRepository)
        rental = await self._rental(db)
        code = uuid4().hex[:12].upper()

        saved = await invite_repo.save(self._invite(rental, db.user_ids[0], code))
        with pytest.raises(IntegrityError):
            await invite_repo.save(self._invite(rental, db.user_ids[0], code))

        # The failed insert only rolled back its savepoint
        found = await invite_repo.find_by_code(InviteCode(code.lower()))
        assert found.id == saved.id
        assert found.status == InviteStatus.PENDING

    @pytest.mark.asyncio
    async def test_mark_accepted_only_once(self, db):
        invite_repo = await db.get(InviteRepository)
        rental = await self._rental(db)
        owner, renter = db.user_ids
        saved = await invite_repo.save(
            self._invite(rental, owner, uuid4().hex[:12].upper())
        )

        accepted = await invite_repo.mark_accepted(saved.id, renter, utcnow())
        again = await invite_repo.mark_accepted(saved.id, owner, utcnow())

        assert accepted.status == InviteStatus.ACCEPTED
        assert accepted.accepted_by == renter
        assert again is None

    @pytest.mark.asyncio
    async def test_set_borrower_and_lists(self, db):
        rental_repo = await db.get(RentalRepository)
        rental = await self._rental(db)
        owner, renter = db.user_ids

        linked = await rental_repo.set_borrower(rental.id, renter)

        assert linked.borrower_id == renter
        assert rental.id in {r.id for r in await rental_repo.find_by_owner(owner)}
        assert rental.id in {r.id for r in await rental_repo.find_by_borrower(renter)}
