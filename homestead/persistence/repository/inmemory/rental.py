"""In-memory rental repository for testing."""

from typing import Optional

from homestead.domain.error import NotFoundError
from homestead.domain.model.rental import Rental
from homestead.domain.repository.rental import RentalRepository
from homestead.domain.value import RentalId, UserId

from .user import InMemoryPropertyRepository


class InMemoryRentalRepository(RentalRepository):
    """In-memory implementation of RentalRepository for testing.

    Owner lookups go through the property repository, mirroring the join
    the database query does.
    """

    def __init__(self, property_repository: InMemoryPropertyRepository) -> None:
        self._rentals: dict[RentalId, Rental] = {}
        self._next_id = 1
        self._properties = property_repository

    async def find_by_id(self, rental_id: RentalId) -> Optional[Rental]:
        """Find a rental by ID."""
        return self._rentals.get(rental_id)

    async def save(self, rental: Rental) -> Rental:
        """Insert a new rental and assign it the next ID."""
        saved = rental.model_copy(update={"id": RentalId(self._next_id)})
        self._next_id += 1
        self._rentals[saved.id] = saved
        return saved

    async def _update(self, rental_id: RentalId, **values) -> Rental:
        rental = self._rentals.get(rental_id)
        if rental is None:
            raise NotFoundError("Rental", rental_id)
        updated = rental.model_copy(update=values)
        self._rentals[rental_id] = updated
        return updated

    async def set_borrower(self, rental_id: RentalId, borrower_id: UserId) -> Rental:
        """Set the rental's borrower, replacing any previous one."""
        return await self._update(rental_id, borrower_id=borrower_id)

    async def deactivate(self, rental_id: RentalId) -> Rental:
        """Mark the rental as ended."""
        return await self._update(rental_id, is_active=False)

    async def find_by_owner(self, owner_id: UserId) -> list[Rental]:
        """List rentals of properties owned by the user, newest start first."""
        owned = self._properties.owned_by(owner_id)
        rentals = [r for r in self._rentals.values() if r.property_id in owned]
        rentals.sort(key=lambda r: (r.start_date, r.id), reverse=True)
        return rentals

    async def find_by_borrower(self, borrower_id: UserId) -> list[Rental]:
        """List rentals where the user is the borrower, newest start first."""
        rentals = [r for r in self._rentals.values() if r.borrower_id == borrower_id]
        rentals.sort(key=lambda r: (r.start_date, r.id), reverse=True)
        return rentals
