"""Unit tests for RentalService and the borrower linking rule."""

from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio

from homestead.domain.error import ForbiddenError, NotFoundError, ValidationError
from homestead.domain.service import LinkTransition, RentalService, decide_link
from homestead.domain.value import Principal, PropertyId, RentalId, RentalRole, Role, UserId
from homestead.persistence.repository.inmemory import (
    InMemoryPropertyRepository,
    InMemoryRentalRepository,
    InMemoryUserRepository,
)
from tests.conftest import make_property, make_rental, make_user
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked, no docker needed
unit_env = create_env_fixture()

OWNER = Principal(user_id=UserId(1))
RENTER = Principal(user_id=UserId(2))
STRANGER = Principal(user_id=UserId(3))
ADMIN = Principal(user_id=UserId(9), role=Role.ADMIN)


@pytest_asyncio.fixture
async def seeded_env(unit_env):
    """User 1 owns property 10; users 2, 3 and admin 9 exist."""
    users = await unit_env.get(InMemoryUserRepository)
    properties = await unit_env.get(InMemoryPropertyRepository)
    for user_id in (1, 2, 3):
        users.add(make_user(user_id))
    users.add(make_user(9, role=Role.ADMIN))
    properties.add(make_property(10, owner_id=1))
    return unit_env


class TestDecideLink:
    """Tests for the linking rule applied on redemption."""

    def test_owner_is_skipped(self):
        rental = make_rental(10).model_copy(update={"id": RentalId(1)})
        prop = make_property(10, owner_id=1)

        assert decide_link(rental, prop, UserId(1)) == LinkTransition.OWNER_SKIPPED

    def test_current_borrower_is_noop(self):
        rental = make_rental(10, borrower_id=2)
        prop = make_property(10, owner_id=1)

        assert decide_link(rental, prop, UserId(2)) == LinkTransition.ALREADY_BORROWER

    def test_empty_slot_links(self):
        rental = make_rental(10)
        prop = make_property(10, owner_id=1)

        assert decide_link(rental, prop, UserId(2)) == LinkTransition.LINKED

    def test_different_borrower_is_replaced(self):
        """The latest redeemer wins the borrower slot."""
        rental = make_rental(10, borrower_id=2)
        prop = make_property(10, owner_id=1)

        assert decide_link(rental, prop, UserId(3)) == LinkTransition.LINKED


class TestStartRental:
    """Tests for start_rental method."""

    @pytest.mark.asyncio
    async def test_owner_starts_rental(self, seeded_env):
        rental_service = await seeded_env.get(RentalService)
        start = datetime(2026, 1, 1, tzinfo=timezone.utc)

        rental = await rental_service.start_rental(
            OWNER, PropertyId(10), None, start, start + timedelta(days=30), 1200
        )

        assert rental.id is not None
        assert rental.is_active is True
        assert rental.borrower_id is None
        assert rental.rent_amount == 1200

    @pytest.mark.asyncio
    async def test_non_owner_forbidden(self, seeded_env):
        rental_service = await seeded_env.get(RentalService)
        start = datetime(2026, 1, 1, tzinfo=timezone.utc)

        with pytest.raises(ForbiddenError):
            await rental_service.start_rental(
                STRANGER, PropertyId(10), None, start, start, 1200
            )

    @pytest.mark.asyncio
    async def test_admin_may_start_any_rental(self, seeded_env):
        rental_service = await seeded_env.get(RentalService)
        start = datetime(2026, 1, 1, tzinfo=timezone.utc)

        rental = await rental_service.start_rental(
            ADMIN, PropertyId(10), UserId(2), start, start, 800
        )

        assert rental.borrower_id == 2

    @pytest.mark.asyncio
    async def test_non_positive_rent_rejected(self, seeded_env):
        rental_service = await seeded_env.get(RentalService)
        start = datetime(2026, 1, 1, tzinfo=timezone.utc)

        with pytest.raises(ValidationError):
            await rental_service.start_rental(
                OWNER, PropertyId(10), None, start, start, 0
            )

    @pytest.mark.asyncio
    async def test_unknown_property_not_found(self, seeded_env):
        rental_service = await seeded_env.get(RentalService)
        start = datetime(2026, 1, 1, tzinfo=timezone.utc)

        with pytest.raises(NotFoundError):
            await rental_service.start_rental(
                OWNER, PropertyId(99), None, start, start, 1000
            )


class TestEndAndListRentals:
    """Tests for end_rental and list_rentals."""

    @pytest.mark.asyncio
    async def test_owner_ends_rental(self, seeded_env):
        rental_service = await seeded_env.get(RentalService)
        rentals = await seeded_env.get(InMemoryRentalRepository)
        rental = await rentals.save(make_rental(10, borrower_id=2))

        ended = await rental_service.end_rental(OWNER, rental.id)

        assert ended.is_active is False

    @pytest.mark.asyncio
    async def test_borrower_cannot_end_rental(self, seeded_env):
        rental_service = await seeded_env.get(RentalService)
        rentals = await seeded_env.get(InMemoryRentalRepository)
        rental = await rentals.save(make_rental(10, borrower_id=2))

        with pytest.raises(ForbiddenError):
            await rental_service.end_rental(RENTER, rental.id)

    @pytest.mark.asyncio
    async def test_end_unknown_rental_not_found(self, seeded_env):
        rental_service = await seeded_env.get(RentalService)

        with pytest.raises(NotFoundError):
            await rental_service.end_rental(OWNER, RentalId(404))

    @pytest.mark.asyncio
    async def test_list_by_role(self, seeded_env):
        rental_service = await seeded_env.get(RentalService)
        rentals = await seeded_env.get(InMemoryRentalRepository)
        rental = await rentals.save(make_rental(10, borrower_id=2))

        owned = await rental_service.list_rentals(UserId(1), RentalRole.OWNER)
        rented = await rental_service.list_rentals(UserId(2), RentalRole.RENTER)

        assert [r.id for r in owned] == [rental.id]
        assert [r.id for r in rented] == [rental.id]
        assert await rental_service.list_rentals(UserId(1), RentalRole.RENTER) == []
        assert await rental_service.list_rentals(UserId(2), RentalRole.OWNER) == []


class TestRentalAccess:
    """Tests for get_rental_for_participant."""

    @pytest.mark.asyncio
    async def test_participants_and_admin_allowed(self, seeded_env):
        rental_service = await seeded_env.get(RentalService)
        rentals = await seeded_env.get(InMemoryRentalRepository)
        rental = await rentals.save(make_rental(10, borrower_id=2))

        for principal in (OWNER, RENTER, ADMIN):
            loaded, prop = await rental_service.get_rental_for_participant(
                rental.id, principal
            )
            assert loaded.id == rental.id
            assert prop.id == 10

    @pytest.mark.asyncio
    async def test_stranger_forbidden(self, seeded_env):
        rental_service = await seeded_env.get(RentalService)
        rentals = await seeded_env.get(InMemoryRentalRepository)
        rental = await rentals.save(make_rental(10, borrower_id=2))

        with pytest.raises(ForbiddenError):
            await rental_service.get_rental_for_participant(rental.id, STRANGER)


class TestLinkBorrower:
    """Tests for link_borrower method."""

    @pytest.mark.asyncio
    async def test_links_into_empty_slot(self, seeded_env):
        rental_service = await seeded_env.get(RentalService)
        rentals = await seeded_env.get(InMemoryRentalRepository)
        rental = await rentals.save(make_rental(10))

        linked = await rental_service.link_borrower(rental.id, UserId(2))

        assert linked.borrower_id == 2

    @pytest.mark.asyncio
    async def test_owner_redeeming_leaves_rental_unchanged(self, seeded_env):
        rental_service = await seeded_env.get(RentalService)
        rentals = await seeded_env.get(InMemoryRentalRepository)
        rental = await rentals.save(make_rental(10))

        linked = await rental_service.link_borrower(rental.id, UserId(1))

        assert linked.borrower_id is None

    @pytest.mark.asyncio
    async def test_overwrites_previous_borrower(self, seeded_env):
        rental_service = await seeded_env.get(RentalService)
        rentals = await seeded_env.get(InMemoryRentalRepository)
        rental = await rentals.save(make_rental(10, borrower_id=2))

        linked = await rental_service.link_borrower(rental.id, UserId(3))

        assert linked.borrower_id == 3
        stored = await rentals.find_by_id(rental.id)
        assert stored.borrower_id == 3
