"""Rental and property repository interfaces."""

from abc import ABC, abstractmethod

from homestead.domain.model import Property, Rental
from homestead.domain.value import PropertyId, RentalId, UserId


class PropertyRepository(ABC):
    """Read access to properties. Listing CRUD lives elsewhere."""

    @abstractmethod
    async def find_by_id(self, property_id: PropertyId) -> Property | None:
        """Find a property by ID."""
        pass


class RentalRepository(ABC):
    """Repository for Rental entity."""

    @abstractmethod
    async def find_by_id(self, rental_id: RentalId) -> Rental | None:
        """Find a rental by ID."""
        pass

    @abstractmethod
    async def save(self, rental: Rental) -> Rental:
        """Insert a new rental and return it with its assigned ID."""
        pass

    @abstractmethod
    async def set_borrower(self, rental_id: RentalId, borrower_id: UserId) -> Rental:
        """Set the rental's borrower, replacing any previous one."""
        pass

    @abstractmethod
    async def deactivate(self, rental_id: RentalId) -> Rental:
        """Mark the rental as ended."""
        pass

    @abstractmethod
    async def find_by_owner(self, owner_id: UserId) -> list[Rental]:
        """List rentals of properties owned by the user, newest start first."""
        pass

    @abstractmethod
    async def find_by_borrower(self, borrower_id: UserId) -> list[Rental]:
        """List rentals where the user is the borrower, newest start first."""
        pass
